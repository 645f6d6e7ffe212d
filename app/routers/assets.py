from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import NotFoundError, ValidationError
from app.deps import authorize_company, get_current_user, require_company_access
from app.models.asset import Asset
from app.models.company import Company
from app.models.enums import ActivityAction, AssetType
from app.models.user import User
from app.schemas.asset import AssetCreate, AssetRead, AssetUpdate
from app.services.activity_log import log_activity
from app.services.authorization_service import Action, RequestContext
from app.services.entity_rules import ensure_company_member, normalize_asset_values
from app.services.plans import ensure_can_create_asset
from app.services.repository import CompanyScopedRepository

router = APIRouter(prefix="/api/assets", tags=["assets"])


def _repository(db: Session, company_id: str) -> CompanyScopedRepository[Asset]:
    return CompanyScopedRepository(db, Asset, company_id, not_found_message="Ativo não encontrado")


@router.get("/{company_id}", response_model=List[AssetRead])
def list_assets(
    type: Optional[AssetType] = Query(None),
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    filters = [Asset.type == type.value] if type is not None else []
    return _repository(db, context.effective_company_id).list(*filters)


@router.get("/{company_id}/{asset_id}", response_model=AssetRead)
def get_asset(
    asset_id: str,
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return _repository(db, context.effective_company_id).get(asset_id)


@router.post("", response_model=AssetRead, status_code=201)
def create_asset(
    payload: AssetCreate,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    context = authorize_company(request, db, user, Action.CREATE, payload.company_id)
    company_id = context.effective_company_id
    company = db.query(Company).filter(Company.id == company_id).first()
    if company is None:
        raise NotFoundError("Empresa não encontrada")

    ensure_can_create_asset(db, company, payload.type)
    values = normalize_asset_values(payload.model_dump(exclude={"company_id"}), payload.type)
    ensure_company_member(db, company_id, values.get("assigned_technician_id"), field="assignedTechnicianId")
    values["type"] = AssetType(values["type"]).value

    asset = _repository(db, company_id).create(values)
    log_activity(
        db,
        company_id=company_id,
        user_id=user.id,
        action=ActivityAction.CREATED,
        entity_type="asset",
        entity_id=asset.id,
        entity_name=asset.name,
    )
    db.commit()
    db.refresh(asset)
    return asset


@router.put("/{asset_id}", response_model=AssetRead)
def update_asset(
    asset_id: str,
    payload: AssetUpdate,
    _company_id: str = Query(..., alias="companyId"),
    context: RequestContext = Depends(require_company_access(Action.UPDATE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    repository = _repository(db, context.effective_company_id)
    current = repository.get(asset_id)

    values = payload.model_dump(exclude_unset=True)
    if "type" in values and values["type"] is None:
        raise ValidationError(errors=[{"field": "type", "message": "campo obrigatório"}])
    asset_type = values.get("type") or current.type
    if AssetType(asset_type) == AssetType.PHYSICAL:
        values = normalize_asset_values(values, asset_type)
    if "type" in values:
        values["type"] = AssetType(values["type"]).value
    ensure_company_member(
        db,
        context.effective_company_id,
        values.get("assigned_technician_id"),
        field="assignedTechnicianId",
    )

    asset = repository.update(asset_id, values)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.UPDATED,
        entity_type="asset",
        entity_id=asset.id,
        entity_name=asset.name,
        details={"fields": sorted(payload.model_dump(exclude_unset=True))},
    )
    db.commit()
    db.refresh(asset)
    return asset


@router.delete("/{asset_id}/{company_id}")
def delete_asset(
    asset_id: str,
    context: RequestContext = Depends(require_company_access(Action.DELETE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    asset = _repository(db, context.effective_company_id).delete(asset_id)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.DELETED,
        entity_type="asset",
        entity_id=asset_id,
        entity_name=asset.name,
    )
    db.commit()
    return {"success": True}
