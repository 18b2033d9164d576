# boutique_manager/modules/capital/router.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import admin_only
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.modules.transactions.schemas import TransactionResponse
from .service import CapitalService
from .schemas import InjectionCreate

router = APIRouter()


@router.get("", response_model=List[TransactionResponse])
async def list_injections(
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Injections de capital, toutes boutiques ou filtrées par `boutiqueId`"""
    service = CapitalService(db)
    return await service.list_injections(ctx.boutique_id)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def inject_capital(
    data: InjectionCreate,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Injecter du capital dans une boutique (404 si la boutique n'existe pas)"""
    service = CapitalService(db)
    return await service.inject(data, ctx)
