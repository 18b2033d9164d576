# boutique_manager/modules/clients/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import PageParams, SuccessResponse
from .service import ClientsService
from .schemas import ClientCreate, ClientDetail, ClientListResponse, ClientResponse, ClientUpdate

router = APIRouter()


@router.get("", response_model=ClientListResponse)
async def list_clients(
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Liste paginée; `search` porte sur nom, prénom, téléphone et email"""
    service = ClientsService(db)
    return await service.list_clients(ctx, params)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Créer un client; un email vide est enregistré comme absent"""
    service = ClientsService(db)
    return await service.create_client(data, ctx)


@router.get("/{client_id}", response_model=ClientDetail)
async def get_client(
    client_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Client avec ses 5 dernières ventes"""
    service = ClientsService(db)
    return await service.get_client(client_id, ctx)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = ClientsService(db)
    return await service.update_client(client_id, data, ctx)


@router.delete("/{client_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_client(
    client_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = ClientsService(db)
    return await service.delete_client(client_id, ctx)
