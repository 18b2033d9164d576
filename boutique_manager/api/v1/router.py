# boutique_manager/api/v1/router.py
from fastapi import APIRouter

from boutique_manager.api.v1.auth import router as auth_router
from boutique_manager.modules.boutiques import router as boutiques_router
from boutique_manager.modules.capital import router as capital_router
from boutique_manager.modules.categories import router as categories_router
from boutique_manager.modules.clients import router as clients_router
from boutique_manager.modules.commandes import router as commandes_router
from boutique_manager.modules.fournisseurs import router as fournisseurs_router
from boutique_manager.modules.paiements import router as paiements_router
from boutique_manager.modules.produits import router as produits_router
from boutique_manager.modules.rapports import router as rapports_router
from boutique_manager.modules.stocks import router as stocks_router
from boutique_manager.modules.transactions import router as transactions_router
from boutique_manager.modules.utilisateurs import router as utilisateurs_router
from boutique_manager.modules.ventes import router as ventes_router

# Router principal de l'API v1
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentification"])

# ==================== ADMINISTRATION ====================

api_router.include_router(
    boutiques_router,
    prefix="/boutiques",
    tags=["Boutiques"]
)

api_router.include_router(
    utilisateurs_router,
    prefix="/utilisateurs",
    tags=["Utilisateurs"]
)

api_router.include_router(
    capital_router,
    prefix="/capital",
    tags=["Capital"]
)

# ==================== BOUTIQUE ====================

api_router.include_router(
    categories_router,
    prefix="/categories",
    tags=["Catégories"]
)

api_router.include_router(
    clients_router,
    prefix="/clients",
    tags=["Clients"]
)

api_router.include_router(
    fournisseurs_router,
    prefix="/fournisseurs",
    tags=["Fournisseurs"]
)

api_router.include_router(
    produits_router,
    prefix="/produits",
    tags=["Produits"]
)

api_router.include_router(
    stocks_router,
    prefix="/stocks",
    tags=["Stocks"]
)

api_router.include_router(
    commandes_router,
    prefix="/commandes",
    tags=["Commandes"]
)

api_router.include_router(
    ventes_router,
    prefix="/ventes",
    tags=["Ventes"]
)

api_router.include_router(
    paiements_router,
    prefix="/paiements",
    tags=["Paiements"]
)

api_router.include_router(
    transactions_router,
    prefix="/transactions",
    tags=["Transactions"]
)

api_router.include_router(
    rapports_router,
    prefix="/rapports",
    tags=["Rapports"]
)
