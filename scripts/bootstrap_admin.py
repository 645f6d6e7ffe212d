#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from sqlalchemy import inspect  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.config import (  # noqa: E402
    SUPER_ADMIN_EMAIL,
    SUPER_ADMIN_FIRST_NAME,
    SUPER_ADMIN_LAST_NAME,
    SUPER_ADMIN_PASSWORD,
)
from app.core.database import SessionLocal, engine  # noqa: E402
from app.models.enums import UserRole  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.passwords import hash_password, password_looks_hashed  # noqa: E402
from app.services.registration import find_user_by_email, normalize_email  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cria ou promove o super administrador.")
    parser.add_argument("--email", default=SUPER_ADMIN_EMAIL, help="Email (padrão: SUPER_ADMIN_EMAIL)")
    parser.add_argument("--password", default=SUPER_ADMIN_PASSWORD, help="Senha (padrão: SUPER_ADMIN_PASSWORD)")
    parser.add_argument("--first-name", default=SUPER_ADMIN_FIRST_NAME)
    parser.add_argument("--last-name", default=SUPER_ADMIN_LAST_NAME)
    return parser.parse_args(argv)


def ensure_users_table() -> None:
    if not inspect(engine).has_table("users"):
        raise RuntimeError("Tabela users não encontrada. Rode `alembic upgrade head` primeiro.")


def upsert_super_admin(
    db: Session,
    *,
    email: str,
    password: str | None,
    first_name: str,
    last_name: str,
) -> tuple[User, bool]:
    email = normalize_email(email)
    if not email:
        raise ValueError("Email é obrigatório (SUPER_ADMIN_EMAIL).")

    password_hash = None
    if password:
        password_hash = password if password_looks_hashed(password) else hash_password(password)

    existing = find_user_by_email(db, email)
    if existing:
        existing.role = UserRole.SUPER_ADMIN.value
        if password_hash:
            existing.password_hash = password_hash
        db.commit()
        db.refresh(existing)
        return existing, False

    if not password_hash:
        raise ValueError("Senha é obrigatória para criar um novo super admin.")

    user = User(
        email=email,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
        role=UserRole.SUPER_ADMIN.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user, True


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        ensure_users_table()
    except RuntimeError as exc:
        print(str(exc))
        return 1

    db = SessionLocal()
    try:
        user, created = upsert_super_admin(
            db,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    except ValueError as exc:
        print(str(exc))
        return 1
    finally:
        db.close()

    action = "created" if created else "promoted"
    print(f"Super admin {action}: email={user.email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
