from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field

from boutique_manager.shared.schemas.common import CamelModel, InputModel, Money, Pagination


class TransactionType(str, Enum):
    VENTE = "VENTE"
    ACHAT = "ACHAT"
    DEPENSE = "DEPENSE"
    INJECTION_CAPITAL = "INJECTION_CAPITAL"
    RETRAIT = "RETRAIT"
    RECETTE = "RECETTE"


class ManualTransactionType(str, Enum):
    RECETTE = "RECETTE"
    DEPENSE = "DEPENSE"


class CategorieDepense(str, Enum):
    MARCHANDISES = "MARCHANDISES"
    EXPLOITATION = "EXPLOITATION"
    MARKETING = "MARKETING"
    TRANSPORT = "TRANSPORT"
    ADMINISTRATION = "ADMINISTRATION"
    AUTRE = "AUTRE"


class TransactionCreate(InputModel):
    type: ManualTransactionType
    montant: Decimal = Field(..., gt=0, description="Montant positif; une dépense est enregistrée en négatif")
    description: str = Field(..., min_length=1, max_length=500)
    categorie: str = Field(..., min_length=1, max_length=100)
    categorie_depense: Optional[CategorieDepense] = None
    date_transaction: Optional[datetime] = None


class TransactionUpdate(InputModel):
    type: Optional[ManualTransactionType] = None
    montant: Optional[Decimal] = Field(None, gt=0)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    categorie: Optional[str] = Field(None, max_length=100)
    categorie_depense: Optional[CategorieDepense] = None
    date_transaction: Optional[datetime] = None


class UserRef(CamelModel):
    name: str
    email: str


class BoutiqueRef(CamelModel):
    id: str
    nom: str


class TransactionResponse(CamelModel):
    id: str
    type: str
    montant: Money
    description: str
    categorie: Optional[str] = None
    categorie_depense: Optional[str] = None
    paiement_id: Optional[str] = None
    boutique_id: str
    user_id: str
    date_transaction: Optional[datetime] = None
    created_at: Optional[datetime] = None
    user: Optional[UserRef] = None
    boutique: Optional[BoutiqueRef] = None


class TransactionStats(CamelModel):
    recettes_mois: Money = 0
    depenses_mois: Money = 0
    benefice_mois: Money = 0
    solde: Money = 0


class TransactionListResponse(CamelModel):
    transactions: List[TransactionResponse]
    pagination: Pagination
    stats: TransactionStats
