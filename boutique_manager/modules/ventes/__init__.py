"""
Module Ventes - Ventes et sorties de stock

- Numérotation V001, V002... par boutique
- Chaque ligne décrémente le stock (mouvement SORTIE lié à la vente)
- Le montant encaissé à la création alimente une RECETTE
"""

from .router import router
from .service import VentesService
from .repository import VentesRepository

__all__ = [
    "router",
    "VentesService",
    "VentesRepository"
]
