# boutique_manager/modules/fournisseurs/service.py
import logging

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import BusinessError, NotFoundError
from boutique_manager.shared.database.models import Fournisseur
from boutique_manager.shared.schemas.common import CountSummary, PageParams
from .repository import FournisseursRepository
from .schemas import (
    CommandeSummary, FournisseurCreate, FournisseurDetail, FournisseurListResponse,
    FournisseurResponse, FournisseurUpdate
)

logger = logging.getLogger(__name__)


class FournisseursService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = FournisseursRepository(db)

    async def list_fournisseurs(self, ctx: RequestContext, params: PageParams) -> FournisseurListResponse:
        fournisseurs, total = self.repository.list_fournisseurs(
            ctx.boutique_id, params.offset, params.limit, params.search
        )
        counts = self.repository.commande_counts([f.id for f in fournisseurs])

        items = []
        for fournisseur in fournisseurs:
            item = FournisseurResponse.model_validate(fournisseur)
            item.count = CountSummary(commandes=counts.get(fournisseur.id, 0))
            items.append(item)

        return FournisseurListResponse(fournisseurs=items, pagination=params.pagination(total))

    async def get_fournisseur(self, fournisseur_id: str, ctx: RequestContext) -> FournisseurDetail:
        fournisseur = self.repository.get(fournisseur_id, ctx.boutique_id)
        if not fournisseur:
            raise NotFoundError("Fournisseur non trouvé")

        detail = FournisseurDetail(
            **FournisseurResponse.model_validate(fournisseur).model_dump(),
            commandes=[
                CommandeSummary.model_validate(c)
                for c in self.repository.latest_commandes(fournisseur.id)
            ],
        )
        detail.count = CountSummary(commandes=self.repository.count_commandes(fournisseur.id))
        return detail

    async def create_fournisseur(self, data: FournisseurCreate, ctx: RequestContext) -> FournisseurResponse:
        boutique_id = ctx.require_boutique()
        fournisseur = self.repository.add(Fournisseur(**data.model_dump(), boutique_id=boutique_id))
        logger.info(f"Fournisseur {fournisseur.id} créé dans {boutique_id} par {ctx.user_id}")
        return FournisseurResponse.model_validate(fournisseur)

    async def update_fournisseur(
        self, fournisseur_id: str, data: FournisseurUpdate, ctx: RequestContext
    ) -> FournisseurResponse:
        fournisseur = self.repository.get(fournisseur_id, ctx.boutique_id)
        if not fournisseur:
            raise NotFoundError("Fournisseur non trouvé")

        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "nom" and not value:
                continue
            setattr(fournisseur, field, value)

        self.repository.commit()
        self.db.refresh(fournisseur)
        return FournisseurResponse.model_validate(fournisseur)

    async def delete_fournisseur(self, fournisseur_id: str, ctx: RequestContext) -> dict:
        fournisseur = self.repository.get(fournisseur_id, ctx.boutique_id)
        if not fournisseur:
            raise NotFoundError("Fournisseur non trouvé")

        commandes = self.repository.count_commandes(fournisseur.id)
        if commandes > 0:
            raise BusinessError(
                "Impossible de supprimer ce fournisseur car il a des commandes associées",
                details={"commandes": commandes},
            )

        self.repository.delete(fournisseur)
        logger.info(f"Fournisseur {fournisseur_id} supprimé par {ctx.user_id}")
        return {"success": True}
