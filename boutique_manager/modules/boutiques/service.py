# boutique_manager/modules/boutiques/service.py
import logging
from typing import List

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import BusinessError, NotFoundError
from boutique_manager.shared.database.models import Boutique
from boutique_manager.shared.schemas.common import CountSummary
from boutique_manager.shared.services.statistics import boutique_stats
from .repository import BoutiquesRepository
from .schemas import BoutiqueCreate, BoutiqueDetail, BoutiqueResponse, BoutiqueStats, BoutiqueUpdate

logger = logging.getLogger(__name__)


class BoutiquesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = BoutiquesRepository(db)

    async def list_boutiques(self, include_stats: bool = False) -> List[BoutiqueResponse]:
        boutiques = self.repository.list_boutiques(with_relations=include_stats)

        results = []
        for boutique in boutiques:
            item = BoutiqueResponse.model_validate(boutique)
            if include_stats:
                item.stats = BoutiqueStats.model_validate(boutique_stats(boutique))
            results.append(item)
        return results

    async def get_boutique(self, boutique_id: str) -> BoutiqueDetail:
        boutique = self.repository.get_with_users(boutique_id)
        if not boutique:
            raise NotFoundError("Boutique non trouvée")

        detail = BoutiqueDetail.model_validate(boutique)
        detail.count = CountSummary.model_validate(self.repository.count_related(boutique_id))
        return detail

    async def create_boutique(self, data: BoutiqueCreate, ctx: RequestContext) -> BoutiqueResponse:
        values = data.model_dump(exclude_none=True)
        boutique = self.repository.add(Boutique(**values))
        logger.info(f"Boutique {boutique.id} créée par {ctx.user_id}")
        return BoutiqueResponse.model_validate(boutique)

    async def update_boutique(self, boutique_id: str, data: BoutiqueUpdate) -> BoutiqueResponse:
        boutique = self.repository.get(boutique_id)
        if not boutique:
            raise NotFoundError("Boutique non trouvée")

        for field, value in data.model_dump(exclude_unset=True).items():
            # nom et capital ne peuvent pas être vidés
            if value is None and field in ("nom", "capital_initial"):
                continue
            setattr(boutique, field, value)

        self.repository.commit()
        self.db.refresh(boutique)
        return BoutiqueResponse.model_validate(boutique)

    async def delete_boutique(self, boutique_id: str, ctx: RequestContext) -> dict:
        boutique = self.repository.get(boutique_id)
        if not boutique:
            raise NotFoundError("Boutique non trouvée")

        if self.repository.count_users(boutique_id) > 0:
            raise BusinessError("Impossible de supprimer une boutique avec des utilisateurs assignés")

        self.repository.delete(boutique)
        logger.info(f"Boutique {boutique_id} supprimée par {ctx.user_id}")
        return {"success": True}
