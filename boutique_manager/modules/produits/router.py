# boutique_manager/modules/produits/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import PageParams, SuccessResponse
from .service import ProduitsService
from .schemas import ProduitCreate, ProduitListResponse, ProduitResponse, ProduitUpdate

router = APIRouter()


@router.get("", response_model=ProduitListResponse)
async def list_produits(
    categorie_id: Optional[str] = Query(None, alias="categorieId"),
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Liste paginée avec la quantité en stock de chaque produit"""
    service = ProduitsService(db)
    return await service.list_produits(ctx, params, categorie_id)


@router.post("", response_model=ProduitResponse, status_code=status.HTTP_201_CREATED)
async def create_produit(
    data: ProduitCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Créer un produit; la catégorie doit appartenir à la boutique"""
    service = ProduitsService(db)
    return await service.create_produit(data, ctx)


@router.get("/{produit_id}", response_model=ProduitResponse)
async def get_produit(
    produit_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = ProduitsService(db)
    return await service.get_produit(produit_id, ctx)


@router.put("/{produit_id}", response_model=ProduitResponse)
async def update_produit(
    produit_id: str,
    data: ProduitUpdate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = ProduitsService(db)
    return await service.update_produit(produit_id, data, ctx)


@router.delete("/{produit_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_produit(
    produit_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = ProduitsService(db)
    return await service.delete_produit(produit_id, ctx)
