from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from boutique_manager.shared.schemas.common import CamelModel, InputModel, Money, Pagination


class MouvementType(str, Enum):
    ENTREE = "ENTREE"
    SORTIE = "SORTIE"


class MouvementCreate(InputModel):
    stock_id: str = Field(..., min_length=1, description="Le stock est requis")
    type: MouvementType
    quantite: int = Field(..., ge=1, description="La quantité doit être positive")
    motif: str = Field(..., min_length=1, max_length=255)


class CategorieName(CamelModel):
    nom: str


class StockProduit(CamelModel):
    id: str
    nom: str
    prix_achat: Money
    prix_vente: Money
    seuil_alerte: int
    categorie: Optional[CategorieName] = None


class MouvementResponse(CamelModel):
    id: str
    stock_id: str
    type: str
    quantite: int
    motif: Optional[str] = None
    vente_id: Optional[str] = None
    created_at: Optional[datetime] = None


class StockResponse(CamelModel):
    id: str
    produit_id: str
    boutique_id: str
    quantite: int
    derniere_entree: Optional[datetime] = None
    derniere_sortie: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    produit: StockProduit
    alerte: bool = False


class StockListResponse(CamelModel):
    stocks: List[StockResponse]
    pagination: Pagination
    stocks_en_alerte: int = 0


class MouvementListResponse(CamelModel):
    mouvements: List[MouvementResponse]
    pagination: Pagination
