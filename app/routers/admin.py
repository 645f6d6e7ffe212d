from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.deps import get_session_payload, require_super_admin
from app.models.company import Company
from app.models.enums import ActivityAction, CompanyPlan
from app.models.user import User
from app.schemas.company import AdminPlanUpdate, AdminStatusUpdate, CompanyRead, SupportStatusRead
from app.services.activity_log import log_activity
from app.services.plans import get_plan_limits
from app.services.registration import DUPLICATE_TAX_ID_MESSAGE
from app.services.session_auth import (
    SUPPORT_MODE_KEY,
    build_user_session,
    create_session,
    set_session_cookie,
    with_support_mode,
    without_support_mode,
)

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)


def _get_company(db: Session, company_id: str) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if company is None:
        raise NotFoundError("Empresa não encontrada")
    return company


def _apply_tax_ids(company: Company, payload: AdminPlanUpdate) -> None:
    # pyme guarda só RUC, professional só cédula.
    if CompanyPlan(payload.plan) == CompanyPlan.PYME:
        ruc = (payload.ruc or "").strip() or company.ruc
        if not ruc:
            raise ValidationError(
                "RUC é obrigatório para o plano pyme",
                errors=[{"field": "ruc", "message": "campo obrigatório"}],
            )
        company.ruc, company.cedula = ruc, None
    else:
        cedula = (payload.cedula or "").strip() or company.cedula
        if not cedula:
            raise ValidationError(
                "Cédula é obrigatória para o plano professional",
                errors=[{"field": "cedula", "message": "campo obrigatório"}],
            )
        company.ruc, company.cedula = None, cedula


def _current_support(request: Request) -> dict | None:
    support = (get_session_payload(request) or {}).get(SUPPORT_MODE_KEY)
    return support if isinstance(support, dict) else None


@router.get("/companies", response_model=List[CompanyRead])
def list_all_companies(
    _user: User = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    return db.query(Company).order_by(Company.created_at.desc()).all()


@router.put("/companies/{company_id}/plan", response_model=CompanyRead)
def update_company_plan(
    company_id: str,
    payload: AdminPlanUpdate,
    user: User = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    company = _get_company(db, company_id)
    _apply_tax_ids(company, payload)
    limits = get_plan_limits(payload.plan)
    company.plan = payload.plan
    company.max_users = payload.max_users or limits.max_users
    company.max_assets = payload.max_assets or limits.max_assets
    company.updated_at = datetime.utcnow()
    log_activity(
        db,
        company_id=company.id,
        user_id=user.id,
        action=ActivityAction.UPDATED,
        entity_type="company",
        entity_id=company.id,
        entity_name=company.name,
        details={"plan": company.plan, "max_users": company.max_users, "max_assets": company.max_assets},
    )
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_TAX_ID_MESSAGE) from exc
    db.refresh(company)
    logger.info("Company plan updated: company_id=%s plan=%s", company.id, company.plan)
    return company


@router.put("/companies/{company_id}/status", response_model=CompanyRead)
def update_company_status(
    company_id: str,
    payload: AdminStatusUpdate,
    user: User = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    company = _get_company(db, company_id)
    company.is_active = payload.is_active
    company.updated_at = datetime.utcnow()
    log_activity(
        db,
        company_id=company.id,
        user_id=user.id,
        action=ActivityAction.UPDATED,
        entity_type="company",
        entity_id=company.id,
        entity_name=company.name,
        details={"is_active": company.is_active},
    )
    db.commit()
    db.refresh(company)
    logger.info("Company status updated: company_id=%s is_active=%s", company.id, company.is_active)
    return company


@router.post("/support-access/{company_id}")
def enter_support_mode(
    company_id: str,
    request: Request,
    response: Response,
    user: User = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    company = _get_company(db, company_id)
    if not company.is_active:
        raise ValidationError("Empresa inativa", kind="company_inactive")

    start_time = datetime.utcnow().isoformat()
    payload = with_support_mode(
        without_support_mode(get_session_payload(request) or build_user_session(user)),
        company_id=company.id,
        admin_id=user.id,
        start_time=start_time,
    )
    payload.pop("exp", None)
    log_activity(
        db,
        company_id=company.id,
        user_id=user.id,
        action=ActivityAction.ACCESSED,
        entity_type="company",
        entity_id=company.id,
        entity_name=f"Support access to {company.name}",
    )
    db.commit()
    set_session_cookie(response, create_session(payload), request)
    logger.info("Support mode entered: admin_id=%s company_id=%s", user.id, company.id)
    return {
        "message": "Acesso de suporte concedido",
        "supportMode": True,
        "company": CompanyRead.model_validate(company).model_dump(mode="json", by_alias=True),
    }


@router.post("/exit-support")
def exit_support_mode(
    request: Request,
    response: Response,
    user: User = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    support = _current_support(request)
    if support is not None:
        company_id = support.get("company_id")
        if company_id and db.query(Company.id).filter(Company.id == company_id).first() is not None:
            log_activity(
                db,
                company_id=company_id,
                user_id=user.id,
                action=ActivityAction.EXITED,
                entity_type="company",
                entity_id=company_id,
                entity_name="Exited support mode",
            )
            db.commit()
        payload = without_support_mode(get_session_payload(request) or build_user_session(user))
        payload.pop("exp", None)
        set_session_cookie(response, create_session(payload), request)
        logger.info("Support mode exited: admin_id=%s company_id=%s", user.id, company_id)
    return {"message": "Modo suporte encerrado", "supportMode": False}


@router.get("/support-status", response_model=SupportStatusRead)
def support_status(
    request: Request,
    _user: User = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    support = _current_support(request)
    if support is None:
        return {"support_mode": False, "company": None, "start_time": None}
    company = db.query(Company).filter(Company.id == support.get("company_id")).first()
    return {"support_mode": True, "company": company, "start_time": support.get("start_time")}
