"""
Module Paiements - Créances clients et encaissements

Une créance est une vente non soldée. Chaque paiement met à jour les
montants et le statut de la vente et alimente une RECETTE.
"""

from .router import router
from .service import PaiementsService
from .repository import PaiementsRepository

__all__ = [
    "router",
    "PaiementsService",
    "PaiementsRepository"
]
