# boutique_manager/modules/stocks/service.py
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.core.exceptions import NotFoundError
from boutique_manager.shared.database.models import Stock
from boutique_manager.shared.schemas.common import PageParams
from .repository import StocksRepository
from .schemas import (
    MouvementCreate, MouvementListResponse, MouvementResponse,
    StockListResponse, StockResponse
)

logger = logging.getLogger(__name__)


def to_response(stock: Stock) -> StockResponse:
    response = StockResponse.model_validate(stock)
    seuil = stock.produit.seuil_alerte
    response.alerte = bool(seuil) and stock.quantite <= seuil
    return response


class StocksService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = StocksRepository(db)

    async def list_stocks(self, ctx: RequestContext, params: PageParams, alerte: bool = False) -> StockListResponse:
        boutique_id = ctx.require_boutique()
        stocks, total = self.repository.list_stocks(
            boutique_id, params.offset, params.limit, params.search, alerte
        )
        return StockListResponse(
            stocks=[to_response(s) for s in stocks],
            pagination=params.pagination(total),
            stocks_en_alerte=self.repository.count_alertes(boutique_id),
        )

    async def get_stock(self, stock_id: str, ctx: RequestContext) -> StockResponse:
        stock = self.repository.get(stock_id, ctx.boutique_id)
        if not stock:
            raise NotFoundError("Stock non trouvé")
        return to_response(stock)

    async def list_mouvements(
        self,
        ctx: RequestContext,
        params: PageParams,
        stock_id: Optional[str] = None,
        type: Optional[str] = None,
        date_debut: Optional[date] = None,
        date_fin: Optional[date] = None,
    ) -> MouvementListResponse:
        mouvements, total = self.repository.list_mouvements(
            ctx.require_boutique(), params.offset, params.limit,
            stock_id=stock_id, type=type, date_debut=date_debut, date_fin=date_fin,
        )
        return MouvementListResponse(
            mouvements=[MouvementResponse.model_validate(m) for m in mouvements],
            pagination=params.pagination(total),
        )

    async def create_mouvement(self, data: MouvementCreate, ctx: RequestContext) -> MouvementResponse:
        boutique_id = ctx.require_boutique()
        stock = self.repository.get(data.stock_id, boutique_id)
        if not stock:
            raise NotFoundError("Stock non trouvé")

        mouvement = self.repository.record_movement(stock, data.type.value, data.quantite, data.motif)
        self.repository.commit()
        self.db.refresh(mouvement)

        logger.info(
            f"Mouvement {mouvement.type} de {mouvement.quantite} sur le stock {stock.id} par {ctx.user_id}"
        )
        return MouvementResponse.model_validate(mouvement)
