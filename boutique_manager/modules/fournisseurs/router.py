# boutique_manager/modules/fournisseurs/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import PageParams, SuccessResponse
from .service import FournisseursService
from .schemas import (
    FournisseurCreate, FournisseurDetail, FournisseurListResponse, FournisseurResponse, FournisseurUpdate
)

router = APIRouter()


@router.get("", response_model=FournisseurListResponse)
async def list_fournisseurs(
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Liste paginée; `search` porte sur nom, prénom, entreprise, email et téléphone"""
    service = FournisseursService(db)
    return await service.list_fournisseurs(ctx, params)


@router.post("", response_model=FournisseurResponse, status_code=status.HTTP_201_CREATED)
async def create_fournisseur(
    data: FournisseurCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Créer un fournisseur"""
    service = FournisseursService(db)
    return await service.create_fournisseur(data, ctx)


@router.get("/{fournisseur_id}", response_model=FournisseurDetail)
async def get_fournisseur(
    fournisseur_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Fournisseur avec ses 10 dernières commandes"""
    service = FournisseursService(db)
    return await service.get_fournisseur(fournisseur_id, ctx)


@router.put("/{fournisseur_id}", response_model=FournisseurResponse)
async def update_fournisseur(
    fournisseur_id: str,
    data: FournisseurUpdate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = FournisseursService(db)
    return await service.update_fournisseur(fournisseur_id, data, ctx)


@router.delete("/{fournisseur_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_fournisseur(
    fournisseur_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = FournisseursService(db)
    return await service.delete_fournisseur(fournisseur_id, ctx)
