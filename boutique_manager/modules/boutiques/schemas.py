from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from boutique_manager.shared.schemas.common import CamelModel, CountSummary, InputModel, Money


class BoutiqueCreate(InputModel):
    nom: str = Field(..., min_length=1, max_length=255)
    adresse: Optional[str] = None
    telephone: Optional[str] = None
    description: Optional[str] = None
    capital_initial: Optional[Decimal] = Field(None, ge=0, description="Capital initial, positif ou nul")


class BoutiqueUpdate(InputModel):
    nom: Optional[str] = Field(None, min_length=1, max_length=255)
    adresse: Optional[str] = None
    telephone: Optional[str] = None
    description: Optional[str] = None
    capital_initial: Optional[Decimal] = Field(None, ge=0)


class BoutiqueStats(CamelModel):
    total_ventes: Money = 0
    total_impayes: Money = 0
    nombre_users: int = 0
    nombre_produits: int = 0
    nombre_ventes: int = 0
    nombre_clients: int = 0


class BoutiqueResponse(CamelModel):
    id: str
    nom: str
    adresse: Optional[str] = None
    telephone: Optional[str] = None
    description: Optional[str] = None
    capital_initial: Money = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    stats: Optional[BoutiqueStats] = None


class BoutiqueUser(CamelModel):
    id: str
    name: str
    email: str
    role: str


class BoutiqueDetail(BoutiqueResponse):
    users: List[BoutiqueUser] = []
    count: CountSummary = Field(default_factory=CountSummary, alias="_count")
