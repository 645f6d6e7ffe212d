from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.deps import authorize_company, get_current_user, require_company_access
from app.models.enums import ActivityAction
from app.models.maintenance_record import MaintenanceRecord
from app.models.user import User
from app.schemas.maintenance import MaintenanceCreate, MaintenanceRead, MaintenanceUpdate
from app.services.activity_log import log_activity
from app.services.authorization_service import Action, RequestContext
from app.services.entity_rules import ensure_asset_in_company
from app.services.repository import CompanyScopedRepository

router = APIRouter(prefix="/api/maintenance", tags=["maintenance"])


def _repository(db: Session, company_id: str) -> CompanyScopedRepository[MaintenanceRecord]:
    return CompanyScopedRepository(
        db,
        MaintenanceRecord,
        company_id,
        not_found_message="Registro de manutenção não encontrado",
    )


@router.get("/asset/{asset_id}/{company_id}", response_model=List[MaintenanceRead])
def list_asset_maintenance(
    asset_id: str,
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return _repository(db, context.effective_company_id).list(MaintenanceRecord.asset_id == asset_id)


@router.get("/{company_id}", response_model=List[MaintenanceRead])
def list_maintenance(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return _repository(db, context.effective_company_id).list()


@router.post("", response_model=MaintenanceRead, status_code=201)
def create_maintenance(
    payload: MaintenanceCreate,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    context = authorize_company(request, db, user, Action.CREATE_MAINTENANCE, payload.company_id)
    company_id = context.effective_company_id
    ensure_asset_in_company(db, company_id, payload.asset_id)

    record = _repository(db, company_id).create(payload.model_dump(exclude={"company_id"}))
    log_activity(
        db,
        company_id=company_id,
        user_id=user.id,
        action=ActivityAction.CREATED,
        entity_type="maintenance",
        entity_id=record.id,
        entity_name=record.title,
    )
    db.commit()
    db.refresh(record)
    return record


@router.put("/{record_id}", response_model=MaintenanceRead)
def update_maintenance(
    record_id: str,
    payload: MaintenanceUpdate,
    _company_id: str = Query(..., alias="companyId"),
    context: RequestContext = Depends(require_company_access(Action.UPDATE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    values = payload.model_dump(exclude_unset=True)
    if "asset_id" in values:
        ensure_asset_in_company(db, context.effective_company_id, values["asset_id"])

    record = _repository(db, context.effective_company_id).update(record_id, values)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.UPDATED,
        entity_type="maintenance",
        entity_id=record.id,
        entity_name=record.title,
        details={"fields": sorted(values)},
    )
    db.commit()
    db.refresh(record)
    return record


@router.delete("/{record_id}/{company_id}")
def delete_maintenance(
    record_id: str,
    context: RequestContext = Depends(require_company_access(Action.DELETE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = _repository(db, context.effective_company_id).delete(record_id)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.DELETED,
        entity_type="maintenance",
        entity_id=record_id,
        entity_name=record.title,
    )
    db.commit()
    return {"success": True}
