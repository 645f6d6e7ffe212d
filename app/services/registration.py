from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, IntegrityFailure
from app.models.company import Company
from app.models.enums import ActivityAction, CompanyPlan, UserRole
from app.models.user import User
from app.models.user_company import UserCompany
from app.schemas.auth import RegisterPayload
from app.schemas.company import CompanyCreate
from app.services.activity_log import log_activity
from app.services.passwords import hash_password
from app.services.plans import get_plan_limits

logger = logging.getLogger(__name__)

DUPLICATE_TAX_ID_MESSAGE = "Já existe uma empresa com este RUC/Cédula ou email"


@dataclass(frozen=True)
class RegistrationResult:
    user: User
    company: Company
    membership: UserCompany


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def _build_company(
    payload_plan: CompanyPlan | str,
    *,
    name: str,
    description: str | None,
    ruc: str | None,
    cedula: str | None,
    address: str | None,
    phone: str | None,
    email: str | None,
) -> Company:
    plan = CompanyPlan(payload_plan)
    limits = get_plan_limits(plan)
    return Company(
        name=name.strip(),
        description=description,
        plan=plan.value,
        max_users=limits.max_users,
        max_assets=limits.max_assets,
        is_active=True,
        ruc=ruc if plan == CompanyPlan.PYME else None,
        cedula=cedula if plan == CompanyPlan.PROFESSIONAL else None,
        address=address,
        phone=phone,
        email=normalize_email(email) if email else None,
    )


def register_company(db: Session, payload: RegisterPayload) -> RegistrationResult:
    """Create user, company and owner membership in one transaction."""
    email = normalize_email(payload.email)
    if find_user_by_email(db, email) is not None:
        raise ConflictError("Email já cadastrado")

    try:
        user = User(
            email=email,
            password_hash=hash_password(payload.password),
            first_name=payload.first_name.strip(),
            last_name=payload.last_name.strip(),
            role=UserRole.MANAGER_OWNER.value,
        )
        db.add(user)
        db.flush()

        company = _build_company(
            payload.plan,
            name=payload.company_name,
            description=payload.company_description,
            ruc=payload.ruc,
            cedula=payload.cedula,
            address=payload.address,
            phone=payload.phone,
            email=payload.company_email,
        )
        db.add(company)
        db.flush()

        membership = UserCompany(user_id=user.id, company_id=company.id, role=UserRole.MANAGER_OWNER.value)
        db.add(membership)
        log_activity(
            db,
            company_id=company.id,
            user_id=user.id,
            action=ActivityAction.CREATED,
            entity_type="company",
            entity_id=company.id,
            entity_name=company.name,
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Registration conflict: email=%s plan=%s", email, payload.plan)
        raise ConflictError(DUPLICATE_TAX_ID_MESSAGE) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Registration failed: email=%s", email)
        raise IntegrityFailure("Erro ao registrar empresa") from exc

    db.refresh(user)
    db.refresh(company)
    logger.info("Company registered: company_id=%s user_id=%s plan=%s", company.id, user.id, company.plan)
    return RegistrationResult(user=user, company=company, membership=membership)


def create_company_for_user(db: Session, *, user: User, payload: CompanyCreate) -> UserCompany:
    """Additional company for an existing user, who becomes its manager_owner."""
    try:
        company = _build_company(
            payload.plan,
            name=payload.name,
            description=payload.description,
            ruc=payload.ruc,
            cedula=payload.cedula,
            address=payload.address,
            phone=payload.phone,
            email=payload.email,
        )
        db.add(company)
        db.flush()

        membership = UserCompany(user_id=user.id, company_id=company.id, role=UserRole.MANAGER_OWNER.value)
        db.add(membership)
        log_activity(
            db,
            company_id=company.id,
            user_id=user.id,
            action=ActivityAction.CREATED,
            entity_type="company",
            entity_id=company.id,
            entity_name=company.name,
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_TAX_ID_MESSAGE) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Company creation failed: user_id=%s", user.id)
        raise IntegrityFailure("Erro ao criar empresa") from exc

    db.refresh(membership)
    logger.info("Company created: company_id=%s user_id=%s", company.id, user.id)
    return membership
