# boutique_manager/core/auth/dependencies.py
from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from boutique_manager.config.database import get_db
from boutique_manager.core.auth.service import AuthService
from boutique_manager.core.auth.tenancy import (
    RequestContext, Role, SessionUser, TenantSource, build_context
)
from boutique_manager.core.exceptions import AuthenticationError
from boutique_manager.shared.database.models import User

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Obtenir l'utilisateur courant depuis le token"""
    if credentials is None:
        raise AuthenticationError()

    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Token invalide ou expiré")

    user_id: Optional[str] = payload.get("user_id")
    if user_id is None:
        raise AuthenticationError("Token invalide")

    # La base fait foi pour le rôle et la boutique
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise AuthenticationError("Utilisateur introuvable")

    return user


async def get_session_user(user: User = Depends(get_current_user)) -> SessionUser:
    return SessionUser(
        user_id=user.id,
        role=Role(user.role),
        boutique_id=user.boutique_id,
        email=user.email,
    )


class TenantPolicy:
    """
    Politique d'accès unique utilisée par tous les endpoints.

    - requires_admin: refuse tout GESTIONNAIRE (403)
    - tenant_source: REQUEST prend en compte ``?boutiqueId=`` (ADMIN seulement),
      SESSION n'utilise que la boutique de la session
    - allow_all: un ADMIN sans boutique demandée n'est pas filtré
    """

    def __init__(
        self,
        requires_admin: bool = False,
        tenant_source: TenantSource = TenantSource.REQUEST,
        allow_all: bool = False,
    ):
        self.requires_admin = requires_admin
        self.tenant_source = tenant_source
        self.allow_all = allow_all

    def __call__(
        self,
        request: Request,
        requested_boutique_id: Optional[str] = Query(None, alias="boutiqueId"),
        session: SessionUser = Depends(get_session_user),
    ) -> RequestContext:
        ctx = build_context(
            session,
            requested_boutique_id,
            requires_admin=self.requires_admin,
            tenant_source=self.tenant_source,
            allow_all=self.allow_all,
        )
        # Repris par le log des requêtes
        request.state.user_id = ctx.user_id
        request.state.boutique_id = ctx.boutique_id
        return ctx


# Politiques prédéfinies
admin_only = TenantPolicy(requires_admin=True, allow_all=True)
scoped = TenantPolicy()
scoped_or_all = TenantPolicy(allow_all=True)
own_boutique = TenantPolicy(tenant_source=TenantSource.SESSION)
