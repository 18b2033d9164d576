# boutique_manager/modules/utilisateurs/router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import admin_only
from boutique_manager.core.auth.tenancy import RequestContext, Role
from boutique_manager.shared.schemas.common import SuccessResponse
from .service import UtilisateursService
from .schemas import UtilisateurCreate, UtilisateurResponse, UtilisateurUpdate

router = APIRouter()


@router.get("", response_model=List[UtilisateurResponse])
async def list_users(
    role: Optional[Role] = Query(None),
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Lister les utilisateurs, filtrables par `role` et `boutiqueId`"""
    service = UtilisateursService(db)
    return await service.list_users(role.value if role else None, ctx.boutique_id)


@router.post("", response_model=UtilisateurResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UtilisateurCreate,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    service = UtilisateursService(db)
    return await service.create_user(data, ctx)


@router.get("/{user_id}", response_model=UtilisateurResponse)
async def get_user(
    user_id: str,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    service = UtilisateursService(db)
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UtilisateurResponse)
async def update_user(
    user_id: str,
    data: UtilisateurUpdate,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Modifier un utilisateur; le mot de passe n'est changé que s'il est fourni"""
    service = UtilisateursService(db)
    return await service.update_user(user_id, data)


@router.delete("/{user_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_user(
    user_id: str,
    ctx: RequestContext = Depends(admin_only),
    db: Session = Depends(get_db)
):
    service = UtilisateursService(db)
    return await service.delete_user(user_id, ctx)
