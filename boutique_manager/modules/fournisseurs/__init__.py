"""
Module Fournisseurs - Fournisseurs de la boutique

Suppression refusée tant que des commandes y sont rattachées.
"""

from .router import router
from .service import FournisseursService
from .repository import FournisseursRepository

__all__ = [
    "router",
    "FournisseursService",
    "FournisseursRepository"
]
