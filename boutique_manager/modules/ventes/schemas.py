from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field

from boutique_manager.shared.schemas.common import CamelModel, InputModel, Money, Pagination


class VenteStatut(str, Enum):
    PAYE = "PAYE"
    PARTIEL = "PARTIEL"
    IMPAYE = "IMPAYE"


class MethodePaiement(str, Enum):
    ESPECES = "ESPECES"
    CARTE = "CARTE"
    VIREMENT = "VIREMENT"
    CHEQUE = "CHEQUE"
    MOBILE = "MOBILE"


class LigneVenteCreate(InputModel):
    produit_id: str = Field(..., min_length=1)
    quantite: int = Field(..., gt=0, description="La quantité doit être supérieure à 0")
    prix_unitaire: Optional[Decimal] = Field(None, ge=0, description="Prix de vente du produit par défaut")


class VenteCreate(InputModel):
    client_id: Optional[str] = None
    lignes: List[LigneVenteCreate] = Field(..., min_length=1, description="Au moins une ligne de vente est requise")
    montant_paye: Optional[Decimal] = Field(None, ge=0, description="Montant encaissé; le total si absent")
    date_echeance: Optional[datetime] = None


class VenteUpdate(InputModel):
    client_id: Optional[str] = None
    date_echeance: Optional[datetime] = None


class ClientRef(CamelModel):
    id: str
    nom: str
    prenom: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None


class VendeurRef(CamelModel):
    id: str
    name: str


class ProduitName(CamelModel):
    id: str
    nom: str


class LigneVenteResponse(CamelModel):
    id: str
    produit_id: str
    quantite: int
    prix_unitaire: Money
    sous_total: Money
    produit: Optional[ProduitName] = None


class PaiementSummary(CamelModel):
    id: str
    montant: Money
    methode_paiement: str
    reference: Optional[str] = None
    date_creation: Optional[datetime] = None


class VenteResponse(CamelModel):
    id: str
    numero_vente: str
    client_id: Optional[str] = None
    boutique_id: str
    user_id: str
    montant_total: Money
    montant_paye: Money
    montant_restant: Money
    statut: str
    date_vente: Optional[datetime] = None
    date_echeance: Optional[datetime] = None
    client: Optional[ClientRef] = None
    user: Optional[VendeurRef] = None
    lignes: List[LigneVenteResponse] = []


class VenteDetail(VenteResponse):
    paiements: List[PaiementSummary] = []


class VenteListResponse(CamelModel):
    ventes: List[VenteResponse]
    pagination: Pagination
