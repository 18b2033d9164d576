# boutique_manager/core/auth/tenancy.py
"""
Résolution du tenant effectif.

Un ADMIN peut cibler n'importe quelle boutique via ``boutiqueId``; un
GESTIONNAIRE est toujours ramené à sa propre boutique, quel que soit le
paramètre envoyé.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from boutique_manager.core.exceptions import AuthenticationError, AuthorizationError


class Role(str, Enum):
    ADMIN = "ADMIN"
    GESTIONNAIRE = "GESTIONNAIRE"


class TenantSource(str, Enum):
    REQUEST = "REQUEST"
    SESSION = "SESSION"


@dataclass(frozen=True)
class SessionUser:
    user_id: str
    role: Role
    boutique_id: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class RequestContext:
    """Contexte explicite passé à chaque handler"""
    session: SessionUser
    boutique_id: Optional[str]

    @property
    def user_id(self) -> str:
        return self.session.user_id

    @property
    def is_admin(self) -> bool:
        return self.session.is_admin

    def require_boutique(self) -> str:
        if self.boutique_id is None:
            raise AuthenticationError("Boutique non spécifiée")
        return self.boutique_id


def resolve_tenant(session: Optional[SessionUser], requested: Optional[str] = None) -> str:
    """Retourne l'identifiant de boutique applicable à la requête"""
    if session is None:
        raise AuthenticationError()

    if session.role == Role.ADMIN and requested:
        return requested

    if session.boutique_id:
        return session.boutique_id

    details = None
    if session.role == Role.GESTIONNAIRE:
        details = {"reason": "NO_TENANT_ASSIGNED"}
    raise AuthenticationError("Boutique non spécifiée", details=details)


def build_context(
    session: Optional[SessionUser],
    requested: Optional[str],
    requires_admin: bool = False,
    tenant_source: TenantSource = TenantSource.REQUEST,
    allow_all: bool = False,
) -> RequestContext:
    """Applique la politique d'accès et produit le contexte de requête"""
    if session is None:
        raise AuthenticationError()

    if requires_admin and not session.is_admin:
        raise AuthorizationError("Accès réservé aux administrateurs")

    if tenant_source == TenantSource.SESSION:
        requested = None

    if allow_all and session.is_admin and not requested:
        return RequestContext(session=session, boutique_id=None)

    return RequestContext(session=session, boutique_id=resolve_tenant(session, requested))
