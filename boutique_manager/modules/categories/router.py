# boutique_manager/modules/categories/router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import SuccessResponse
from .service import CategoriesService
from .schemas import CategorieCreate, CategorieResponse, CategorieUpdate

router = APIRouter()


@router.get("", response_model=List[CategorieResponse])
async def list_categories(
    search: Optional[str] = Query(None),
    include_count: bool = Query(False, alias="includeCount"),
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Catégories triées par nom; `includeCount=true` ajoute `_count.produits`"""
    service = CategoriesService(db)
    return await service.list_categories(ctx, search, include_count)


@router.post("", response_model=CategorieResponse, status_code=status.HTTP_201_CREATED)
async def create_categorie(
    data: CategorieCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    service = CategoriesService(db)
    return await service.create_categorie(data, ctx)


@router.get("/{categorie_id}", response_model=CategorieResponse)
async def get_categorie(
    categorie_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = CategoriesService(db)
    return await service.get_categorie(categorie_id, ctx)


@router.put("/{categorie_id}", response_model=CategorieResponse)
async def update_categorie(
    categorie_id: str,
    data: CategorieUpdate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = CategoriesService(db)
    return await service.update_categorie(categorie_id, data, ctx)


@router.delete("/{categorie_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_categorie(
    categorie_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = CategoriesService(db)
    return await service.delete_categorie(categorie_id, ctx)
