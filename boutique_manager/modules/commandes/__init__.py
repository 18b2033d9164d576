"""
Module Commandes - Commandes fournisseurs

- Numérotation CMD-000001 par boutique
- Réception partielle ou totale : entrées en stock, paiement éventuel
- Une commande RECUE ou ANNULEE ne peut plus être réceptionnée
"""

from .router import router
from .service import CommandesService
from .repository import CommandesRepository

__all__ = [
    "router",
    "CommandesService",
    "CommandesRepository"
]
