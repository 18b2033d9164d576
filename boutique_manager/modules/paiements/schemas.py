from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from boutique_manager.modules.ventes.schemas import ClientRef, MethodePaiement, PaiementSummary
from boutique_manager.shared.schemas.common import CamelModel, InputModel, Money, Pagination


class PaiementCreate(InputModel):
    vente_id: str = Field(..., min_length=1)
    montant: Decimal = Field(..., gt=0)
    methode_paiement: MethodePaiement
    reference: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class VenteRef(CamelModel):
    id: str
    numero_vente: str
    montant_total: Money
    montant_paye: Money
    montant_restant: Money
    statut: str
    date_echeance: Optional[datetime] = None
    client: Optional[ClientRef] = None


class PaiementResponse(CamelModel):
    id: str
    vente_id: str
    montant: Money
    methode_paiement: str
    reference: Optional[str] = None
    notes: Optional[str] = None
    date_creation: Optional[datetime] = None
    vente: Optional[VenteRef] = None


class CreanceResponse(CamelModel):
    id: str
    numero_vente: str
    client_id: Optional[str] = None
    montant_total: Money
    montant_paye: Money
    montant_restant: Money
    statut: str
    date_vente: Optional[datetime] = None
    date_echeance: Optional[datetime] = None
    client: Optional[ClientRef] = None
    paiements: List[PaiementSummary] = []
    jours_retard: int = 0
    en_retard: bool = False


class RepartitionStatut(CamelModel):
    statut: str
    montant: Money
    nombre: int


class CreanceStatistiques(CamelModel):
    montant_total_creances: Money = 0
    montant_total_paye: Money = 0
    montant_total_restant: Money = 0
    nombre_creances: int = 0
    repartition_statuts: List[RepartitionStatut] = []


class CreanceListResponse(CamelModel):
    creances: List[CreanceResponse]
    pagination: Pagination
    statistiques: CreanceStatistiques
