"""
Module Clients - Clientèle de la boutique

- Email optionnel, unique par boutique lorsqu'il est renseigné
- Suppression refusée tant que le client a des ventes
"""

from .router import router
from .service import ClientsService
from .repository import ClientsRepository

__all__ = [
    "router",
    "ClientsService",
    "ClientsRepository"
]
