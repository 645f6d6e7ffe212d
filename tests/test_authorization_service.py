from types import SimpleNamespace

import pytest
from starlette.requests import Request

from app.core.errors import AuthorizationError
from app.models.enums import UserRole
from app.services.authorization_service import Action, AuthorizationService, RequestContext, role_allows
from tests.app_factory import add_company, add_user, build_session


def _build_request(path: str = "/api/assets/c1", method: str = "GET") -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "headers": [],
        "query_string": b"",
        "scheme": "http",
        "server": ("testserver", 80),
        "client": ("testclient", 123),
    }
    return Request(scope)


def _context(**overrides) -> RequestContext:
    values = {
        "acting_user_id": "u1",
        "global_role": UserRole.TECHNICIAN,
        "effective_company_id": "c1",
        "company_role": UserRole.TECHNICIAN,
    }
    values.update(overrides)
    return RequestContext(**values)


def test_role_permission_table():
    assert role_allows("technician", Action.READ)
    assert role_allows("technician", Action.CREATE_MAINTENANCE)
    assert not role_allows("technician", Action.CREATE)
    assert not role_allows("technician", Action.DELETE)
    assert role_allows("technical_admin", Action.DELETE)
    assert not role_allows("technical_admin", Action.MANAGE_MEMBERS)
    assert role_allows("manager_owner", Action.MANAGE_COMPANY)
    assert role_allows(" SUPER_ADMIN ", Action.MANAGE_MEMBERS)
    assert not role_allows("desconhecido", Action.READ)
    assert not role_allows(None, Action.READ)


def test_missing_company_is_denied(caplog):
    user = SimpleNamespace(id="u1", role="manager_owner")
    context = _context(effective_company_id=None, company_role=None)

    with caplog.at_level("WARNING"), pytest.raises(AuthorizationError) as exc:
        AuthorizationService.ensure_company_access(
            request=_build_request(),
            user=user,
            context=context,
            action=Action.READ,
        )

    assert exc.value.message == "Empresa não informada"
    assert "Access denied (company_missing)" in caplog.text


def test_non_member_is_denied_and_logged(caplog):
    user = SimpleNamespace(id="u1", role="manager_owner")
    context = _context(global_role=UserRole.MANAGER_OWNER, company_role=None)

    with caplog.at_level("WARNING"), pytest.raises(AuthorizationError) as exc:
        AuthorizationService.ensure_company_access(
            request=_build_request(),
            user=user,
            context=context,
            action=Action.READ,
        )

    assert exc.value.status_code == 403
    assert exc.value.message == "Empresa não autorizada"
    assert "company_id=c1 endpoint=GET /api/assets/c1" in caplog.text


def test_super_admin_bypasses_membership():
    user = SimpleNamespace(id="admin", role="super_admin")
    context = _context(global_role=UserRole.SUPER_ADMIN, company_role=None)

    result = AuthorizationService.ensure_company_access(
        request=None,
        user=user,
        context=context,
        action=Action.DELETE,
    )

    assert result is context


def test_ensure_super_admin_rejects_other_roles():
    with pytest.raises(AuthorizationError):
        AuthorizationService.ensure_super_admin(
            request=_build_request("/api/admin/companies"),
            user=SimpleNamespace(id="u1", role="manager_owner"),
        )


def test_build_context_reads_membership_role():
    db = build_session()
    company = add_company(db, ruc="R-1")
    user = add_user(db, email="tec@empresa.com", role=UserRole.MANAGER_OWNER, company=company,
                    company_role=UserRole.TECHNICIAN)

    context = AuthorizationService.build_context(db, user=user, requested_company_id=company.id)

    assert context.global_role == UserRole.MANAGER_OWNER
    assert context.company_role == UserRole.TECHNICIAN
    assert context.is_support_override is False
    assert not context.allows(Action.DELETE)


def test_build_context_applies_support_override_only_for_super_admin():
    db = build_session()
    company = add_company(db, ruc="R-1")
    admin = add_user(db, email="root@itam.com", role=UserRole.SUPER_ADMIN)
    owner = add_user(db, email="owner@empresa.com", role=UserRole.MANAGER_OWNER)
    session = {"support_mode": {"company_id": company.id, "admin_id": admin.id, "start_time": "t"}}

    admin_context = AuthorizationService.build_context(
        db, user=admin, requested_company_id="outra", session_payload=session
    )
    owner_context = AuthorizationService.build_context(
        db, user=owner, requested_company_id="outra", session_payload=session
    )

    assert admin_context.effective_company_id == company.id
    assert admin_context.is_support_override is True
    assert owner_context.effective_company_id == "outra"
    assert owner_context.is_support_override is False
