from __future__ import annotations

from contextvars import ContextVar

# Somente para enriquecer logs; regras de acesso usam RequestContext explícito.
_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_COMPANY_ID_CTX: ContextVar[str | None] = ContextVar("company_id", default=None)
_USER_ID_CTX: ContextVar[str | None] = ContextVar("user_id", default=None)


def set_log_context(
    *, request_id: str | None = None, company_id: str | None = None, user_id: str | None = None
) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if company_id is not None:
        _COMPANY_ID_CTX.set(company_id)
    if user_id is not None:
        _USER_ID_CTX.set(user_id)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_company_id() -> str | None:
    return _COMPANY_ID_CTX.get()


def get_user_id() -> str | None:
    return _USER_ID_CTX.get()


def clear_log_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _COMPANY_ID_CTX.set(None)
    _USER_ID_CTX.set(None)
