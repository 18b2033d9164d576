# boutique_manager/modules/produits/service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import BusinessError, NotFoundError
from boutique_manager.shared.database.models import Produit
from boutique_manager.shared.schemas.common import PageParams
from .repository import ProduitsRepository
from .schemas import ProduitCreate, ProduitListResponse, ProduitResponse, ProduitUpdate

logger = logging.getLogger(__name__)


def to_response(produit: Produit) -> ProduitResponse:
    response = ProduitResponse.model_validate(produit)
    stock = next((s for s in produit.stocks if s.boutique_id == produit.boutique_id), None)
    response.quantite_stock = stock.quantite if stock else 0
    return response


class ProduitsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProduitsRepository(db)

    async def list_produits(
        self, ctx: RequestContext, params: PageParams, categorie_id: Optional[str] = None
    ) -> ProduitListResponse:
        produits, total = self.repository.list_produits(
            ctx.boutique_id, params.offset, params.limit, params.search, categorie_id
        )
        return ProduitListResponse(
            produits=[to_response(p) for p in produits],
            pagination=params.pagination(total),
        )

    async def get_produit(self, produit_id: str, ctx: RequestContext) -> ProduitResponse:
        produit = self.repository.get(produit_id, ctx.boutique_id)
        if not produit:
            raise NotFoundError("Produit non trouvé")
        return to_response(produit)

    async def create_produit(self, data: ProduitCreate, ctx: RequestContext) -> ProduitResponse:
        boutique_id = ctx.require_boutique()

        if not self.repository.get_categorie(data.categorie_id, boutique_id):
            raise NotFoundError("Catégorie non trouvée")

        produit = self.repository.create_with_stock(Produit(**data.model_dump(), boutique_id=boutique_id))
        logger.info(f"Produit {produit.id} créé dans {boutique_id} par {ctx.user_id}")
        return to_response(produit)

    async def update_produit(self, produit_id: str, data: ProduitUpdate, ctx: RequestContext) -> ProduitResponse:
        produit = self.repository.get(produit_id, ctx.boutique_id)
        if not produit:
            raise NotFoundError("Produit non trouvé")

        values = data.model_dump(exclude_unset=True)
        categorie_id = values.pop("categorie_id", None)
        if categorie_id and categorie_id != produit.categorie_id:
            if not self.repository.get_categorie(categorie_id, produit.boutique_id):
                raise NotFoundError("Catégorie non trouvée")
            produit.categorie_id = categorie_id

        for field, value in values.items():
            # les champs obligatoires ne sont pas vidés
            if value is None and field != "description":
                continue
            setattr(produit, field, value)

        self.repository.commit()
        self.db.refresh(produit)
        return to_response(produit)

    async def delete_produit(self, produit_id: str, ctx: RequestContext) -> dict:
        produit = self.repository.get(produit_id, ctx.boutique_id)
        if not produit:
            raise NotFoundError("Produit non trouvé")

        if self.repository.count_lignes(produit.id) > 0:
            raise BusinessError("Impossible de supprimer ce produit car il figure dans des ventes ou commandes")

        self.repository.delete(produit)
        logger.info(f"Produit {produit_id} supprimé par {ctx.user_id}")
        return {"success": True}
