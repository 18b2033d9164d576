# boutique_manager/modules/categories/service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import BusinessError, ConflictError, NotFoundError
from boutique_manager.shared.database.models import Categorie
from boutique_manager.shared.schemas.common import CountSummary
from .repository import CategoriesRepository
from .schemas import CategorieCreate, CategorieResponse, CategorieUpdate

logger = logging.getLogger(__name__)


class CategoriesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CategoriesRepository(db)

    def _with_count(self, categorie: Categorie, produits: int) -> CategorieResponse:
        response = CategorieResponse.model_validate(categorie)
        response.count = CountSummary(produits=produits)
        return response

    async def list_categories(
        self, ctx: RequestContext, search: Optional[str] = None, include_count: bool = False
    ) -> List[CategorieResponse]:
        categories = self.repository.list_categories(ctx.boutique_id, search)
        if not include_count:
            return [CategorieResponse.model_validate(c) for c in categories]

        counts = self.repository.produit_counts([c.id for c in categories])
        return [self._with_count(c, counts.get(c.id, 0)) for c in categories]

    async def get_categorie(self, categorie_id: str, ctx: RequestContext) -> CategorieResponse:
        categorie = self.repository.get(categorie_id, ctx.boutique_id)
        if not categorie:
            raise NotFoundError("Catégorie non trouvée")
        return self._with_count(categorie, self.repository.count_produits(categorie.id))

    async def create_categorie(self, data: CategorieCreate, ctx: RequestContext) -> CategorieResponse:
        boutique_id = ctx.require_boutique()

        if self.repository.find_by_nom(boutique_id, data.nom):
            raise ConflictError("Une catégorie avec ce nom existe déjà", field="nom")

        logger.info(f"Création de la catégorie '{data.nom}' dans {boutique_id} par {ctx.user_id}")
        categorie = self.repository.add(Categorie(
            nom=data.nom,
            description=data.description,
            boutique_id=boutique_id,
        ))
        return CategorieResponse.model_validate(categorie)

    async def update_categorie(
        self, categorie_id: str, data: CategorieUpdate, ctx: RequestContext
    ) -> CategorieResponse:
        categorie = self.repository.get(categorie_id, ctx.boutique_id)
        if not categorie:
            raise NotFoundError("Catégorie non trouvée")

        values = data.model_dump(exclude_unset=True)
        nom = values.get("nom")
        if nom and self.repository.find_by_nom(categorie.boutique_id, nom, exclude_id=categorie.id):
            raise ConflictError("Une catégorie avec ce nom existe déjà", field="nom")

        if nom:
            categorie.nom = nom
        if "description" in values:
            categorie.description = values["description"]

        self.repository.commit()
        self.db.refresh(categorie)
        return CategorieResponse.model_validate(categorie)

    async def delete_categorie(self, categorie_id: str, ctx: RequestContext) -> dict:
        categorie = self.repository.get(categorie_id, ctx.boutique_id)
        if not categorie:
            raise NotFoundError("Catégorie non trouvée")

        produits = self.repository.count_produits(categorie.id)
        if produits > 0:
            raise BusinessError(
                f"Impossible de supprimer cette catégorie car elle contient {produits} produit(s)"
            )

        self.repository.delete(categorie)
        logger.info(f"Catégorie {categorie_id} supprimée par {ctx.user_id}")
        return {"success": True}
