# boutique_manager/modules/rapports/router.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.dependencies import scoped
from boutique_manager.core.auth.tenancy import RequestContext
from .service import RapportsService
from .schemas import Periode, RapportType

router = APIRouter()


@router.get("")
async def generate_rapport(
    type: RapportType = Query(...),
    periode: Optional[Periode] = Query(None),
    date_debut: Optional[date] = Query(None, alias="dateDebut"),
    date_fin: Optional[date] = Query(None, alias="dateFin"),
    ctx: RequestContext = Depends(scoped),
    db: Session = Depends(get_db)
):
    """
    Générer un rapport pour une boutique

    **Types :** ventes, produits, clients, stocks, financier

    **Période :**
    - `dateDebut` et `dateFin` ensemble priment sur `periode`
    - `periode` : jour, semaine (depuis dimanche), mois, trimestre, annee
    - par défaut : mois en cours
    """
    service = RapportsService(db)
    return await service.generate(type, ctx, periode=periode, date_debut=date_debut, date_fin=date_fin)
