# boutique_manager/modules/stocks/router.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import PageParams
from .service import StocksService
from .schemas import (
    MouvementCreate, MouvementListResponse, MouvementResponse, MouvementType,
    StockListResponse, StockResponse
)

router = APIRouter()


@router.get("", response_model=StockListResponse)
async def list_stocks(
    alerte: bool = Query(False, description="Seulement les stocks sous le seuil d'alerte"),
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Stocks de la boutique; `search` porte sur le nom du produit"""
    service = StocksService(db)
    return await service.list_stocks(ctx, params, alerte)


@router.get("/mouvements", response_model=MouvementListResponse)
async def list_mouvements(
    stock_id: Optional[str] = Query(None, alias="stockId"),
    type: Optional[MouvementType] = Query(None),
    date_debut: Optional[date] = Query(None, alias="dateDebut"),
    date_fin: Optional[date] = Query(None, alias="dateFin"),
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    service = StocksService(db)
    return await service.list_mouvements(
        ctx, params,
        stock_id=stock_id,
        type=type.value if type else None,
        date_debut=date_debut,
        date_fin=date_fin,
    )


@router.post("/mouvements", response_model=MouvementResponse, status_code=status.HTTP_201_CREATED)
async def create_mouvement(
    data: MouvementCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Entrée ou sortie manuelle; une sortie au-delà du disponible est refusée"""
    service = StocksService(db)
    return await service.create_mouvement(data, ctx)


@router.get("/{stock_id}", response_model=StockResponse)
async def get_stock(
    stock_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = StocksService(db)
    return await service.get_stock(stock_id, ctx)
