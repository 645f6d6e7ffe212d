# app/deps.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import SESSION_COOKIE_NAME
from app.core.database import get_db
from app.core.errors import AuthenticationError
from app.core.request_context import set_log_context
from app.models.user import User
from app.services.authorization_service import Action, AuthorizationService, RequestContext
from app.services.session_auth import decode_session


def get_session_payload(request: Request) -> Optional[Dict[str, Any]]:
    """Payload decodificado pelo UserSessionMiddleware; cai para o cookie se ausente."""
    payload = getattr(request.state, "session_payload", None)
    if payload is not None:
        return payload
    token = request.cookies.get(SESSION_COOKIE_NAME)
    return decode_session(token) if token else None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        raise AuthenticationError("Não autenticado")

    payload = get_session_payload(request)
    if not payload:
        raise AuthenticationError("Sessão expirada")

    user_id = payload.get("user_id")
    if not user_id:
        raise AuthenticationError("Sessão inválida")

    user = db.query(User).filter(User.id == str(user_id)).first()
    if not user:
        raise AuthenticationError("Usuário não encontrado")

    request.state.user = user
    set_log_context(user_id=user.id)
    return user


def _resolve_company_id(request: Request, company_id: str | None) -> str | None:
    if company_id is not None:
        return company_id

    path_company = request.path_params.get("company_id")
    if path_company:
        return str(path_company)

    query_company = request.query_params.get("companyId") or request.query_params.get("company_id")
    if query_company:
        return query_company

    return None


def authorize_company(
    request: Request,
    db: Session,
    user: User,
    action: Action,
    company_id: str | None = None,
) -> RequestContext:
    """Resolve o RequestContext e valida a ação; usado também com companyId vindo do body."""
    context = AuthorizationService.build_context(
        db,
        user=user,
        requested_company_id=_resolve_company_id(request, company_id),
        session_payload=get_session_payload(request),
    )
    AuthorizationService.ensure_company_access(request=request, user=user, context=context, action=action)
    request.state.request_context = context
    set_log_context(company_id=context.effective_company_id)
    return context


def require_company_access(action: Action):
    def _dependency(
        request: Request,
        db: Session = Depends(get_db),
        user: User = Depends(get_current_user),
    ) -> RequestContext:
        return authorize_company(request, db, user, action)

    return _dependency


def require_super_admin(
    request: Request,
    user: User = Depends(get_current_user),
) -> User:
    AuthorizationService.ensure_super_admin(request=request, user=user)
    return user
