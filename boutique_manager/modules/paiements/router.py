# boutique_manager/modules/paiements/router.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped, scoped_or_all
from boutique_manager.core.auth.tenancy import RequestContext
from boutique_manager.modules.ventes.schemas import VenteStatut
from boutique_manager.shared.schemas.common import PageParams, SuccessResponse
from .service import PaiementsService
from .schemas import CreanceListResponse, PaiementCreate, PaiementResponse

router = APIRouter()


@router.get("", response_model=CreanceListResponse)
async def list_creances(
    statut: Optional[VenteStatut] = Query(None),
    client_id: Optional[str] = Query(None, alias="clientId"),
    date_debut: Optional[date] = Query(None, alias="dateDebut"),
    date_fin: Optional[date] = Query(None, alias="dateFin"),
    params: PageParams = Depends(),
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """
    Lister les créances (ventes non soldées par défaut)

    **Statistiques (toutes ventes de la boutique) :**
    - montantTotalCreances, montantTotalPaye, montantTotalRestant
    - nombreCreances, repartitionStatuts
    """
    service = PaiementsService(db)
    return await service.list_creances(
        ctx, params,
        statut=statut.value if statut else None,
        client_id=client_id,
        date_debut=date_debut,
        date_fin=date_fin,
    )


@router.post("", response_model=PaiementResponse, status_code=status.HTTP_201_CREATED)
async def create_paiement(
    data: PaiementCreate,
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """Encaisser un paiement sur une vente (montant ≤ montant restant)"""
    service = PaiementsService(db)
    return await service.create_paiement(data, ctx)


@router.get("/{paiement_id}", response_model=PaiementResponse)
async def get_paiement(
    paiement_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    service = PaiementsService(db)
    return await service.get_paiement(paiement_id, ctx)


@router.delete("/{paiement_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_paiement(
    paiement_id: str,
    ctx: RequestContext = Depends(scoped_or_all),
    db: Session = Depends(get_db)
):
    """Supprimer un paiement; le statut de la vente est recalculé"""
    service = PaiementsService(db)
    return await service.delete_paiement(paiement_id, ctx)
