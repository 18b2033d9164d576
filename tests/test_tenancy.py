import pytest

from boutique_manager.core.auth.tenancy import (
    RequestContext, Role, SessionUser, TenantSource, build_context, resolve_tenant
)
from boutique_manager.core.exceptions import AuthenticationError, AuthorizationError

ADMIN = SessionUser(user_id="u-admin", role=Role.ADMIN)
ADMIN_WITH_BOUTIQUE = SessionUser(user_id="u-admin2", role=Role.ADMIN, boutique_id="b-home")
GESTIONNAIRE = SessionUser(user_id="u-gest", role=Role.GESTIONNAIRE, boutique_id="b-1")
ORPHAN = SessionUser(user_id="u-orphan", role=Role.GESTIONNAIRE)


def test_admin_requested_boutique_wins():
    assert resolve_tenant(ADMIN, "b-2") == "b-2"
    assert resolve_tenant(ADMIN_WITH_BOUTIQUE, "b-2") == "b-2"


def test_admin_falls_back_to_own_boutique():
    assert resolve_tenant(ADMIN_WITH_BOUTIQUE, None) == "b-home"


def test_admin_without_any_boutique_is_rejected():
    with pytest.raises(AuthenticationError) as exc:
        resolve_tenant(ADMIN, None)
    assert exc.value.message == "Boutique non spécifiée"
    assert exc.value.details is None


def test_gestionnaire_ignores_requested_boutique():
    assert resolve_tenant(GESTIONNAIRE, "b-other") == "b-1"
    assert resolve_tenant(GESTIONNAIRE, None) == "b-1"


def test_gestionnaire_without_boutique_reports_reason():
    with pytest.raises(AuthenticationError) as exc:
        resolve_tenant(ORPHAN, "b-1")
    assert exc.value.details == {"reason": "NO_TENANT_ASSIGNED"}


def test_missing_session():
    with pytest.raises(AuthenticationError):
        resolve_tenant(None, "b-1")
    with pytest.raises(AuthenticationError):
        build_context(None, "b-1")


def test_admin_only_policy_rejects_gestionnaire():
    with pytest.raises(AuthorizationError):
        build_context(GESTIONNAIRE, None, requires_admin=True, allow_all=True)


def test_allow_all_gives_admin_unscoped_context():
    ctx = build_context(ADMIN, None, allow_all=True)
    assert ctx.boutique_id is None
    assert ctx.is_admin
    assert build_context(ADMIN, "b-2", allow_all=True).boutique_id == "b-2"


def test_allow_all_never_widens_gestionnaire():
    ctx = build_context(GESTIONNAIRE, None, allow_all=True)
    assert ctx.boutique_id == "b-1"


def test_session_source_ignores_query_parameter():
    ctx = build_context(ADMIN_WITH_BOUTIQUE, "b-2", tenant_source=TenantSource.SESSION)
    assert ctx.boutique_id == "b-home"
    with pytest.raises(AuthenticationError):
        build_context(ADMIN, "b-2", tenant_source=TenantSource.SESSION)


def test_require_boutique():
    ctx = RequestContext(session=ADMIN, boutique_id=None)
    with pytest.raises(AuthenticationError):
        ctx.require_boutique()
    assert RequestContext(session=GESTIONNAIRE, boutique_id="b-1").require_boutique() == "b-1"
    assert ctx.user_id == "u-admin"
