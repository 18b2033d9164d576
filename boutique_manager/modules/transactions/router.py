# boutique_manager/modules/transactions/router.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import PageParams, SuccessResponse
from .service import TransactionsService
from .schemas import (
    TransactionCreate, TransactionListResponse, TransactionResponse,
    TransactionType, TransactionUpdate
)

router = APIRouter()


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    type: Optional[TransactionType] = Query(None),
    categorie: Optional[str] = Query(None),
    date_debut: Optional[date] = Query(None, alias="dateDebut"),
    date_fin: Optional[date] = Query(None, alias="dateFin"),
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """
    Lister les transactions d'une boutique

    **Statistiques :**
    - recettesMois, depensesMois, beneficeMois (mois en cours)
    - solde = capital initial + injections + recettes - dépenses
    """
    service = TransactionsService(db)
    return await service.list_transactions(
        ctx, params,
        type=type.value if type else None,
        categorie=categorie,
        date_debut=date_debut,
        date_fin=date_fin,
    )


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    data: TransactionCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Enregistrer une recette ou une dépense (`categorieDepense` requise pour une dépense)"""
    service = TransactionsService(db)
    return await service.create_transaction(data, ctx)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = TransactionsService(db)
    return await service.get_transaction(transaction_id, ctx)


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    data: TransactionUpdate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = TransactionsService(db)
    return await service.update_transaction(transaction_id, data, ctx)


@router.delete("/{transaction_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_transaction(
    transaction_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = TransactionsService(db)
    return await service.delete_transaction(transaction_id, ctx)
