"""
Module Utilisateurs - Comptes ADMIN et GESTIONNAIRE

Réservé aux administrateurs. Un gestionnaire est toujours rattaché à une
boutique existante; un administrateur n'en a jamais.
"""

from .router import router
from .service import UtilisateursService
from .repository import UtilisateursRepository

__all__ = [
    "router",
    "UtilisateursService",
    "UtilisateursRepository"
]
