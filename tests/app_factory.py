"""Helpers para montar app + banco SQLite em memória nos testes."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.config import SESSION_COOKIE_NAME
from app.core.database import Base, enable_sqlite_foreign_keys, get_db
from app.core.errors import register_error_handlers
from app.middleware.user_session import UserSessionMiddleware
from app.models.company import Company
from app.models.enums import UserRole
from app.models.user import User
from app.models.user_company import UserCompany
from app.services.passwords import hash_password
from app.services.session_auth import create_session


def build_session() -> Session:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return testing_session_local()


def build_client(db: Session, *routers) -> TestClient:
    app = FastAPI()
    app.add_middleware(UserSessionMiddleware)
    register_error_handlers(app)
    for router in routers:
        app.include_router(router)
    app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)


def login_as(client: TestClient, user: User, **extra) -> None:
    client.cookies.set(SESSION_COOKIE_NAME, create_session({"user_id": user.id, "role": user.role, **extra}))


def add_company(db: Session, *, name: str = "Empresa", ruc: str | None = None, **values) -> Company:
    company = Company(
        name=name,
        plan=values.pop("plan", "pyme"),
        max_users=values.pop("max_users", 10),
        max_assets=values.pop("max_assets", 500),
        ruc=ruc,
        **values,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def add_user(
    db: Session,
    *,
    email: str,
    role: UserRole = UserRole.TECHNICIAN,
    company: Company | None = None,
    company_role: UserRole | None = None,
    password: str | None = None,
) -> User:
    user = User(
        email=email,
        password_hash=hash_password(password) if password else "hashed",
        first_name=email.split("@")[0].title(),
        last_name="Teste",
        role=role.value,
    )
    db.add(user)
    db.flush()
    if company is not None:
        db.add(UserCompany(user_id=user.id, company_id=company.id, role=(company_role or role).value))
    db.commit()
    db.refresh(user)
    return user
