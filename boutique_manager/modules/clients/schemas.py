from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from boutique_manager.shared.schemas.common import (
    CamelModel, CountSummary, InputModel, Money, Pagination
)


class ClientCreate(InputModel):
    nom: str = Field(..., min_length=1, max_length=255)
    prenom: Optional[str] = None
    telephone: Optional[str] = None
    adresse: Optional[str] = None
    email: Optional[EmailStr] = None


class ClientUpdate(InputModel):
    nom: Optional[str] = Field(None, min_length=1, max_length=255)
    prenom: Optional[str] = None
    telephone: Optional[str] = None
    adresse: Optional[str] = None
    email: Optional[EmailStr] = None


class VenteSummary(CamelModel):
    id: str
    numero_vente: str
    montant_total: Money
    montant_restant: Money
    statut: str
    date_vente: Optional[datetime] = None


class ClientResponse(CamelModel):
    id: str
    nom: str
    prenom: Optional[str] = None
    telephone: Optional[str] = None
    adresse: Optional[str] = None
    email: Optional[str] = None
    boutique_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    count: Optional[CountSummary] = Field(None, alias="_count")


class ClientDetail(ClientResponse):
    ventes: List[VenteSummary] = []


class ClientListResponse(CamelModel):
    clients: List[ClientResponse]
    pagination: Pagination
