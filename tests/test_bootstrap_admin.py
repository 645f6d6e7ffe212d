import pytest

from app.models.user import User
from app.services.passwords import verify_password
from scripts import bootstrap_admin
from tests.app_factory import add_user, build_session


def test_creates_super_admin_with_hashed_password():
    db = build_session()

    user, created = bootstrap_admin.upsert_super_admin(
        db,
        email=" Root@ITAM.com ",
        password="admin123",
        first_name="Super",
        last_name="Admin",
    )

    assert created is True
    assert user.email == "root@itam.com"
    assert user.role == "super_admin"
    assert verify_password("admin123", user.password_hash)


def test_promotes_existing_user_without_touching_password():
    db = build_session()
    existing = add_user(db, email="owner@empresa.com")

    user, created = bootstrap_admin.upsert_super_admin(
        db,
        email="owner@empresa.com",
        password=None,
        first_name="x",
        last_name="y",
    )

    assert created is False
    assert user.id == existing.id
    assert user.role == "super_admin"
    assert user.password_hash == "hashed"
    assert db.query(User).count() == 1


def test_new_admin_requires_password_and_email():
    db = build_session()

    with pytest.raises(ValueError):
        bootstrap_admin.upsert_super_admin(db, email="novo@itam.com", password="", first_name="a", last_name="b")
    with pytest.raises(ValueError):
        bootstrap_admin.upsert_super_admin(db, email=" ", password="x", first_name="a", last_name="b")
