"""
Module Produits - Catalogue et stock initial

La création d'un produit crée son stock à zéro dans la même transaction.
"""

from .router import router
from .service import ProduitsService
from .repository import ProduitsRepository

__all__ = [
    "router",
    "ProduitsService",
    "ProduitsRepository"
]
