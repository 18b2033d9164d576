# boutique_manager/modules/boutiques/__init__.py
"""
Module Boutiques - Gestion des tenants

Réservé aux administrateurs :
- Liste des boutiques, avec statistiques agrégées à la demande
- Création, modification, consultation
- Suppression refusée tant que des utilisateurs sont rattachés

Architecture:
- router.py: Endpoints
- service.py: Règles métier et agrégations
- repository.py: Accès aux données
- schemas.py: Modèles de requête/réponse
"""

from .router import router
from .service import BoutiquesService
from .repository import BoutiquesRepository

__all__ = [
    "router",
    "BoutiquesService",
    "BoutiquesRepository"
]
