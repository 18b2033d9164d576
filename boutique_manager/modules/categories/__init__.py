"""
Module Catégories - Catalogue de la boutique

- Nom unique par boutique
- Suppression refusée tant que la catégorie contient des produits
"""

from .router import router
from .service import CategoriesService
from .repository import CategoriesRepository

__all__ = [
    "router",
    "CategoriesService",
    "CategoriesRepository"
]
