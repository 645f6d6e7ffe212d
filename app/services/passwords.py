from __future__ import annotations

from passlib.context import CryptContext

BCRYPT_MAX_BYTES = 72

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(password: str) -> str:
    if not password_fits_bcrypt(password):
        raise ValueError("Senha maior que 72 bytes em UTF-8.")
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash or not password_fits_bcrypt(password):
        return False
    try:
        return _pwd_context.verify(password, password_hash)
    except ValueError:
        # hash em formato desconhecido
        return False


def password_looks_hashed(password: str) -> bool:
    return password.startswith(("$2a$", "$2b$", "$2y$"))
