from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from boutique_manager.shared.schemas.common import CamelModel, InputModel, Money, Pagination


class ProduitCreate(InputModel):
    nom: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    prix_achat: Decimal = Field(..., gt=0, description="Le prix d'achat doit être positif")
    prix_vente: Decimal = Field(..., gt=0, description="Le prix de vente doit être positif")
    seuil_alerte: int = Field(0, ge=0)
    categorie_id: str = Field(..., min_length=1)


class ProduitUpdate(InputModel):
    nom: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    prix_achat: Optional[Decimal] = Field(None, gt=0)
    prix_vente: Optional[Decimal] = Field(None, gt=0)
    seuil_alerte: Optional[int] = Field(None, ge=0)
    categorie_id: Optional[str] = None


class CategorieRef(CamelModel):
    id: str
    nom: str


class ProduitResponse(CamelModel):
    id: str
    nom: str
    description: Optional[str] = None
    prix_achat: Money
    prix_vente: Money
    seuil_alerte: int
    categorie_id: str
    boutique_id: str
    categorie: Optional[CategorieRef] = None
    quantite_stock: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProduitListResponse(CamelModel):
    produits: List[ProduitResponse]
    pagination: Pagination
