from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from boutique_manager.shared.schemas.common import (
    CamelModel, CountSummary, InputModel, Money, Pagination
)


class FournisseurCreate(InputModel):
    nom: str = Field(..., min_length=1, max_length=255)
    prenom: Optional[str] = None
    entreprise: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[EmailStr] = None
    adresse: Optional[str] = None
    ville: Optional[str] = None
    pays: Optional[str] = None
    notes: Optional[str] = None


class FournisseurUpdate(FournisseurCreate):
    nom: Optional[str] = Field(None, min_length=1, max_length=255)


class CommandeSummary(CamelModel):
    id: str
    numero_commande: str
    statut: str
    montant_total: Money
    date_commande: Optional[datetime] = None


class FournisseurResponse(CamelModel):
    id: str
    nom: str
    prenom: Optional[str] = None
    entreprise: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    adresse: Optional[str] = None
    ville: Optional[str] = None
    pays: Optional[str] = None
    notes: Optional[str] = None
    boutique_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    count: Optional[CountSummary] = Field(None, alias="_count")


class FournisseurDetail(FournisseurResponse):
    commandes: List[CommandeSummary] = []


class FournisseurListResponse(CamelModel):
    fournisseurs: List[FournisseurResponse]
    pagination: Pagination
