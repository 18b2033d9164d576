"""
Module Stocks - Quantités et mouvements

Chaque mouvement ENTREE/SORTIE met à jour la quantité du stock; une sortie
ne peut jamais rendre le stock négatif.
"""

from .router import router
from .service import StocksService
from .repository import StocksRepository

__all__ = [
    "router",
    "StocksService",
    "StocksRepository"
]
