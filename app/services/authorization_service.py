from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from fastapi import Request
from sqlalchemy.orm import Session

from app.core.errors import AuthorizationError
from app.models.enums import UserRole
from app.models.user import User
from app.models.user_company import UserCompany

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_MAINTENANCE = "create_maintenance"
    MANAGE_COMPANY = "manage_company"
    MANAGE_MEMBERS = "manage_members"


_TECHNICAL_ACTIONS = frozenset(
    {Action.READ, Action.CREATE, Action.UPDATE, Action.DELETE, Action.CREATE_MAINTENANCE}
)

ROLE_PERMISSIONS: dict[UserRole, frozenset[Action]] = {
    UserRole.TECHNICIAN: frozenset({Action.READ, Action.CREATE_MAINTENANCE}),
    UserRole.TECHNICAL_ADMIN: _TECHNICAL_ACTIONS,
    UserRole.MANAGER_OWNER: _TECHNICAL_ACTIONS | {Action.MANAGE_COMPANY, Action.MANAGE_MEMBERS},
    UserRole.SUPER_ADMIN: frozenset(Action),
}


def role_allows(role: UserRole | str | None, action: Action) -> bool:
    try:
        normalized = UserRole((role or "").strip().lower())
    except ValueError:
        return False
    return action in ROLE_PERMISSIONS[normalized]


@dataclass(frozen=True)
class RequestContext:
    """Who is acting and against which company, resolved once per request."""

    acting_user_id: str
    global_role: UserRole
    effective_company_id: str | None
    company_role: UserRole | None
    is_support_override: bool = False

    @property
    def is_super_admin(self) -> bool:
        return self.global_role == UserRole.SUPER_ADMIN

    def allows(self, action: Action) -> bool:
        if self.is_super_admin:
            return True
        return self.company_role is not None and role_allows(self.company_role, action)


class AuthorizationService:
    """Centralize company-scope and RBAC checks for tenant endpoints."""

    @staticmethod
    def normalize_role(role: str | None) -> UserRole | None:
        try:
            return UserRole((role or "").strip().lower())
        except ValueError:
            return None

    @staticmethod
    def log_access_denied(
        *,
        reason: str,
        user: User,
        company_id: str | None,
        request: Request | None,
        company_role: str | None = None,
    ) -> None:
        endpoint = f"{request.method} {request.url.path}" if request is not None else None
        logger.warning(
            "Access denied (%s): user_id=%s user_role=%s company_role=%s company_id=%s endpoint=%s",
            reason,
            getattr(user, "id", None),
            getattr(user, "role", None),
            company_role,
            company_id,
            endpoint,
        )

    @staticmethod
    def support_company_id(session_payload: Mapping[str, Any] | None) -> str | None:
        support = (session_payload or {}).get("support_mode")
        if not isinstance(support, Mapping):
            return None
        company_id = support.get("company_id")
        return str(company_id) if company_id else None

    @classmethod
    def build_context(
        cls,
        db: Session,
        *,
        user: User,
        requested_company_id: str | None,
        session_payload: Mapping[str, Any] | None = None,
    ) -> RequestContext:
        global_role = cls.normalize_role(user.role) or UserRole.TECHNICIAN
        support_company_id = None
        if global_role == UserRole.SUPER_ADMIN:
            support_company_id = cls.support_company_id(session_payload)

        # Em modo suporte a empresa do override prevalece sobre a da requisição.
        effective_company_id = support_company_id or requested_company_id
        company_role = None
        if effective_company_id is not None:
            membership = (
                db.query(UserCompany)
                .filter(
                    UserCompany.user_id == user.id,
                    UserCompany.company_id == effective_company_id,
                )
                .first()
            )
            if membership is not None:
                company_role = cls.normalize_role(membership.role)

        return RequestContext(
            acting_user_id=user.id,
            global_role=global_role,
            effective_company_id=effective_company_id,
            company_role=company_role,
            is_support_override=support_company_id is not None,
        )

    @classmethod
    def ensure_company_access(
        cls,
        *,
        request: Request | None,
        user: User,
        context: RequestContext,
        action: Action,
    ) -> RequestContext:
        if context.effective_company_id is None:
            cls.log_access_denied(reason="company_missing", user=user, company_id=None, request=request)
            raise AuthorizationError("Empresa não informada")

        if context.is_super_admin:
            return context

        if context.company_role is None:
            cls.log_access_denied(
                reason="company_mismatch",
                user=user,
                company_id=context.effective_company_id,
                request=request,
            )
            raise AuthorizationError("Empresa não autorizada")

        if not context.allows(action):
            cls.log_access_denied(
                reason=f"role_denied:{action.value}",
                user=user,
                company_id=context.effective_company_id,
                request=request,
                company_role=context.company_role.value,
            )
            raise AuthorizationError("Permissão insuficiente")
        return context

    @classmethod
    def ensure_super_admin(cls, *, request: Request | None, user: User) -> None:
        if cls.normalize_role(user.role) != UserRole.SUPER_ADMIN:
            cls.log_access_denied(reason="super_admin_required", user=user, company_id=None, request=request)
            raise AuthorizationError("Acesso restrito ao super administrador")
