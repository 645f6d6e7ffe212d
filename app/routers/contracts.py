from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import NotFoundError, ValidationError
from app.deps import authorize_company, get_current_user, require_company_access
from app.models.company import Company
from app.models.contract import Contract
from app.models.enums import ActivityAction
from app.models.user import User
from app.schemas.contract import ContractCreate, ContractRead, ContractUpdate
from app.services.activity_log import log_activity
from app.services.authorization_service import Action, RequestContext
from app.services.plans import ensure_can_create_contract
from app.services.repository import CompanyScopedRepository

router = APIRouter(prefix="/api/contracts", tags=["contracts"])


def _repository(db: Session, company_id: str) -> CompanyScopedRepository[Contract]:
    return CompanyScopedRepository(db, Contract, company_id, not_found_message="Contrato não encontrado")


@router.get("/{company_id}", response_model=List[ContractRead])
def list_contracts(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return _repository(db, context.effective_company_id).list()


@router.post("", response_model=ContractRead, status_code=201)
def create_contract(
    payload: ContractCreate,
    request: Request,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    context = authorize_company(request, db, user, Action.CREATE, payload.company_id)
    company = db.query(Company).filter(Company.id == context.effective_company_id).first()
    if company is None:
        raise NotFoundError("Empresa não encontrada")
    ensure_can_create_contract(db, company)

    contract = _repository(db, company.id).create(payload.model_dump(exclude={"company_id"}))
    log_activity(
        db,
        company_id=company.id,
        user_id=user.id,
        action=ActivityAction.CREATED,
        entity_type="contract",
        entity_id=contract.id,
        entity_name=contract.name,
    )
    db.commit()
    db.refresh(contract)
    return contract


@router.put("/{contract_id}", response_model=ContractRead)
def update_contract(
    contract_id: str,
    payload: ContractUpdate,
    _company_id: str = Query(..., alias="companyId"),
    context: RequestContext = Depends(require_company_access(Action.UPDATE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    repository = _repository(db, context.effective_company_id)
    current = repository.get(contract_id)
    values = payload.model_dump(exclude_unset=True)

    start_date = values.get("start_date") or current.start_date
    end_date = values.get("end_date") or current.end_date
    if end_date < start_date:
        raise ValidationError(
            "endDate deve ser posterior a startDate",
            errors=[{"field": "endDate", "message": "anterior a startDate"}],
        )

    contract = repository.update(contract_id, values)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.UPDATED,
        entity_type="contract",
        entity_id=contract.id,
        entity_name=contract.name,
        details={"fields": sorted(values)},
    )
    db.commit()
    db.refresh(contract)
    return contract


@router.delete("/{contract_id}/{company_id}")
def delete_contract(
    contract_id: str,
    context: RequestContext = Depends(require_company_access(Action.DELETE)),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    contract = _repository(db, context.effective_company_id).delete(contract_id)
    log_activity(
        db,
        company_id=context.effective_company_id,
        user_id=user.id,
        action=ActivityAction.DELETED,
        entity_type="contract",
        entity_id=contract_id,
        entity_name=contract.name,
    )
    db.commit()
    return {"success": True}
