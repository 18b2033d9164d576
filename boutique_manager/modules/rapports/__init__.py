"""
Module Rapports - Synthèses d'activité d'une boutique

Rapports ventes, produits, clients, stocks et financier sur une période
(jour, semaine, mois, trimestre, année ou dates explicites).
"""

from .router import router
from .service import RapportsService
from .repository import RapportsRepository

__all__ = [
    "router",
    "RapportsService",
    "RapportsRepository"
]
