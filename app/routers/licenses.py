from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import NotFoundError
from app.deps import authorize_company, get_current_user, require_company_access
from app.models.company import Company
from app.models.enums import ActivityAction
from app.models.license import License
from app.models.user import User
from app.schemas.license import LicenseCreate, LicenseRead, LicenseUpdate
from app.services.activity_log import log_activity
from app.services.authorization_service import Action, RequestContext
from app.services.entity_rules import ensure_asset_in_company
from app.services.plans import ensure_can_create_license
from app.services.repository import CompanyScopedRepository

router = APIRouter(prefix="/api/licenses", tags=["licenses"])


def _repository(db: Session, company_id: str) -> CompanyScopedRepository[License]:
    return CompanyScopedRepository(db, License, company_id, not_found_message="Licença não encontrada")


@router.get("/{company_id}", response_model=List[LicenseRead])
def list_licenses(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return _repository(db, context.effective_company_id).list()


@router.post("", response_model=LicenseRead, status_code=201)
def create_license(
    payload: LicenseCreate,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    context = authorize_company(request, db, user, Action.CREATE, payload.company_id)
    company = db.query(Company).filter(Company.id == context.effective_company_id).first()
    if company is None:
        raise NotFoundError("Empresa não encontrada")
    ensure_can_create_license(db, company)
    ensure_asset_in_company(db, company.id, payload.asset_id)

    license_ = _repository(db, company.id).create(payload.model_dump(exclude={"company_id"}))
    log_activity(
        db,
        company_id=company.id,
        user_id=user.id,
        action=ActivityAction.CREATED,
        entity_type="license",
        entity_id=license_.id,
        entity_name=license_.name,
    )
    db.commit()
    db.refresh(license_)
    return license_


@router.put("/{license_id}", response_model=LicenseRead)
def update_license(
    license_id: str,
    payload: LicenseUpdate,
    _company_id: str = Query(..., alias="companyId"),
    context: RequestContext = Depends(require_company_access(Action.UPDATE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    values = payload.model_dump(exclude_unset=True)
    ensure_asset_in_company(db, context.effective_company_id, values.get("asset_id"))

    license_ = _repository(db, context.effective_company_id).update(license_id, values)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.UPDATED,
        entity_type="license",
        entity_id=license_.id,
        entity_name=license_.name,
        details={"fields": sorted(values)},
    )
    db.commit()
    db.refresh(license_)
    return license_


@router.delete("/{license_id}/{company_id}")
def delete_license(
    license_id: str,
    context: RequestContext = Depends(require_company_access(Action.DELETE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    license_ = _repository(db, context.effective_company_id).delete(license_id)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.DELETED,
        entity_type="license",
        entity_id=license_id,
        entity_name=license_.name,
    )
    db.commit()
    return {"success": True}
