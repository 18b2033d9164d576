# boutique_manager/modules/boutiques/router.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import admin_only
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import SuccessResponse
from .service import BoutiquesService
from .schemas import BoutiqueCreate, BoutiqueDetail, BoutiqueResponse, BoutiqueUpdate

router = APIRouter()


@router.get("", response_model=List[BoutiqueResponse])
async def list_boutiques(
    include_stats: bool = Query(False, alias="includeStats"),
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """
    Lister les boutiques

    Avec `includeStats=true`, chaque boutique porte `stats` :
    totalVentes, totalImpayes et le nombre d'utilisateurs, produits,
    ventes et clients.
    """
    service = BoutiquesService(db)
    return await service.list_boutiques(include_stats)


@router.post("", response_model=BoutiqueResponse, status_code=status.HTTP_201_CREATED)
async def create_boutique(
    data: BoutiqueCreate,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    service = BoutiquesService(db)
    return await service.create_boutique(data, ctx)


@router.get("/{boutique_id}", response_model=BoutiqueDetail)
async def get_boutique(
    boutique_id: str,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Boutique avec ses utilisateurs et le nombre de produits, ventes et clients"""
    service = BoutiquesService(db)
    return await service.get_boutique(boutique_id)


@router.put("/{boutique_id}", response_model=BoutiqueResponse)
async def update_boutique(
    boutique_id: str,
    data: BoutiqueUpdate,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    service = BoutiquesService(db)
    return await service.update_boutique(boutique_id, data)


@router.delete("/{boutique_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_boutique(
    boutique_id: str,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Supprimer une boutique sans utilisateurs assignés"""
    service = BoutiquesService(db)
    return await service.delete_boutique(boutique_id, ctx)
