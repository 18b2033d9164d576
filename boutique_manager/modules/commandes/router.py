# boutique_manager/modules/commandes/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import PageParams, SuccessResponse
from .service import CommandesService
from .schemas import (
    CommandeCreate, CommandeListResponse, CommandeResponse, CommandeStatut,
    CommandeUpdate, ReceptionCreate, ReceptionResponse
)

router = APIRouter()


@router.get("", response_model=CommandeListResponse)
async def list_commandes(
    statut: Optional[CommandeStatut] = Query(None),
    fournisseur_id: Optional[str] = Query(None, alias="fournisseurId"),
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = CommandesService(db)
    return await service.list_commandes(
        ctx, params, statut=statut.value if statut else None, fournisseur_id=fournisseur_id
    )


@router.post("", response_model=CommandeResponse, status_code=status.HTTP_201_CREATED)
async def create_commande(
    data: CommandeCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Créer une commande; le fournisseur et les produits doivent appartenir à la boutique"""
    service = CommandesService(db)
    return await service.create_commande(data, ctx)


@router.get("/{commande_id}", response_model=CommandeResponse)
async def get_commande(
    commande_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = CommandesService(db)
    return await service.get_commande(commande_id, ctx)


@router.put("/{commande_id}", response_model=CommandeResponse)
async def update_commande(
    commande_id: str,
    data: CommandeUpdate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Modifier notes, échéance, ou annuler la commande"""
    service = CommandesService(db)
    return await service.update_commande(commande_id, data, ctx)


@router.delete("/{commande_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_commande(
    commande_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = CommandesService(db)
    return await service.delete_commande(commande_id, ctx)


@router.post("/{commande_id}/reception", response_model=ReceptionResponse)
async def receive_commande(
    commande_id: str,
    data: ReceptionCreate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """
    Réceptionner une commande

    **Body :**
    - `lignesRecues`: [{ligneId, quantiteRecue}]
    - `montantPaye`: paiement au fournisseur (écriture ACHAT)
    - `annulerReste`: clôture la commande sur les quantités reçues
    """
    service = CommandesService(db)
    return await service.receive_commande(commande_id, data, ctx)
