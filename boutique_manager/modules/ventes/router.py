# boutique_manager/modules/ventes/router.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.shared.schemas.common import PageParams, SuccessResponse
from .service import VentesService
from .schemas import VenteCreate, VenteDetail, VenteListResponse, VenteStatut, VenteUpdate

router = APIRouter()


@router.get("", response_model=VenteListResponse)
async def list_ventes(
    statut: Optional[VenteStatut] = Query(None),
    date_debut: Optional[date] = Query(None, alias="dateDebut"),
    date_fin: Optional[date] = Query(None, alias="dateFin"),
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """
    Lister les ventes d'une boutique

    `search` porte sur le numéro de vente et le nom du client.
    """
    service = VentesService(db)
    return await service.list_ventes(
        ctx, params,
        statut=statut.value if statut else None,
        date_debut=date_debut,
        date_fin=date_fin,
    )


@router.post("", response_model=VenteDetail, status_code=status.HTTP_201_CREATED)
async def create_vente(
    data: VenteCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """
    Enregistrer une vente

    **Body :**
    - `lignes`: [{produitId, quantite, prixUnitaire?}]
    - `clientId`: optionnel, doit appartenir à la boutique
    - `montantPaye`: le total si absent; détermine le statut PAYE / PARTIEL / IMPAYE
    """
    service = VentesService(db)
    return await service.create_vente(data, ctx)


@router.get("/{vente_id}", response_model=VenteDetail)
async def get_vente(
    vente_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = VentesService(db)
    return await service.get_vente(vente_id, ctx)


@router.put("/{vente_id}", response_model=VenteDetail)
async def update_vente(
    vente_id: str,
    data: VenteUpdate,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Modifier le client ou l'échéance; les montants passent par les paiements"""
    service = VentesService(db)
    return await service.update_vente(vente_id, data, ctx)


@router.delete("/{vente_id}", response_model=SuccessResponse)
async def cancel_vente(
    vente_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = VentesService(db)
    return await service.cancel_vente(vente_id, ctx)
