from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field

from boutique_manager.shared.schemas.common import CamelModel, InputModel, Money, Pagination


class CommandeStatut(str, Enum):
    EN_ATTENTE = "EN_ATTENTE"
    EN_COURS = "EN_COURS"
    RECUE = "RECUE"
    ANNULEE = "ANNULEE"


class LigneCommandeCreate(InputModel):
    produit_id: str = Field(..., min_length=1, description="Le produit est requis")
    quantite: int = Field(..., gt=0)
    prix_unitaire: Decimal = Field(..., ge=0)


class CommandeCreate(InputModel):
    fournisseur_id: str = Field(..., min_length=1, description="Le fournisseur est requis")
    lignes: List[LigneCommandeCreate] = Field(..., min_length=1, description="Au moins une ligne de commande est requise")
    date_echeance: Optional[datetime] = None
    date_commande: Optional[datetime] = None
    notes: Optional[str] = None


class CommandeUpdate(InputModel):
    statut: Optional[CommandeStatut] = None
    date_echeance: Optional[datetime] = None
    notes: Optional[str] = None


class LigneRecue(InputModel):
    ligne_id: str
    quantite_recue: int = Field(..., ge=0)


class ReceptionCreate(InputModel):
    lignes_recues: List[LigneRecue]
    montant_paye: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
    annuler_reste: bool = False


class ProduitName(CamelModel):
    id: str
    nom: str


class FournisseurRef(CamelModel):
    id: str
    nom: str
    entreprise: Optional[str] = None


class LigneCommandeResponse(CamelModel):
    id: str
    produit_id: str
    quantite: int
    quantite_recue: int
    prix_unitaire: Money
    sous_total: Money
    produit: Optional[ProduitName] = None


class CommandeResponse(CamelModel):
    id: str
    numero_commande: str
    fournisseur_id: str
    boutique_id: str
    statut: str
    montant_total: Money
    montant_paye: Money
    montant_restant: Money
    date_commande: Optional[datetime] = None
    date_echeance: Optional[datetime] = None
    date_reception: Optional[datetime] = None
    notes: Optional[str] = None
    fournisseur: Optional[FournisseurRef] = None
    lignes: List[LigneCommandeResponse] = []


class CommandeListResponse(CamelModel):
    commandes: List[CommandeResponse]
    pagination: Pagination


class ReceptionResponse(CamelModel):
    commande: CommandeResponse
    montant_total_recu: Money
    lignes_traitees: int
    statut_final: str
