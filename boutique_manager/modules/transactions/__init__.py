"""
Module Transactions - Trésorerie de la boutique

Recettes et dépenses saisies manuellement, plus les écritures générées par
les ventes, paiements, réceptions de commandes et injections de capital.
La liste porte les statistiques du mois et le solde.
"""

from .router import router
from .service import TransactionsService
from .repository import TransactionsRepository

__all__ = [
    "router",
    "TransactionsService",
    "TransactionsRepository"
]
