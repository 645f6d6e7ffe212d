from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthenticationError
from app.deps import get_current_user
from app.models.user import User
from app.schemas.auth import LoginPayload, LoginResponse, RegisterPayload, UserRead
from app.schemas.company import RegisterResponse
from app.services.passwords import verify_password
from app.services.registration import find_user_by_email, register_company
from app.services.session_auth import (
    build_session_cookie_options,
    build_user_session,
    clear_session_cookie,
    create_session,
    set_session_cookie,
)

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


def _start_session(response: Response, request: Request, user: User) -> None:
    cookie_options = build_session_cookie_options(request)
    logger.info(
        "[AUTH_COOKIE] setting session domain=%s samesite=%s secure=%s",
        cookie_options.get("domain") or "host-only",
        cookie_options["samesite"],
        cookie_options["secure"],
    )
    set_session_cookie(response, create_session(build_user_session(user)), request)


@router.post("/register", response_model=RegisterResponse)
def register(
    payload: RegisterPayload,
    response: Response,
    request: Request,
    db: Session = Depends(get_db),
):
    result = register_company(db, payload)
    _start_session(response, request, result.user)
    return {"message": "Empresa registrada com sucesso", "company": result.company, "user": result.user}


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginPayload,
    response: Response,
    request: Request,
    db: Session = Depends(get_db),
):
    user = find_user_by_email(db, payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("Login failed: email=%s", payload.email.strip().lower())
        raise AuthenticationError("Email ou senha incorretos")

    _start_session(response, request, user)
    logger.info("Login success: user_id=%s", user.id)
    return {"message": "Login realizado com sucesso", "user": user}


@router.post("/logout")
def logout(response: Response, request: Request, _user: User = Depends(get_current_user)):
    clear_session_cookie(response, request)
    return {"message": "Sessão encerrada"}


@router.get("/auth/user", response_model=UserRead)
def current_user(user: User = Depends(get_current_user)):
    return user
