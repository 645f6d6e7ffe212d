from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload

from app.core.database import get_db
from app.core.errors import NotFoundError
from app.deps import get_current_user, require_company_access
from app.models.company import Company
from app.models.user import User
from app.models.user_company import UserCompany
from app.schemas.company import CompanyCreate, CompanyRead, MembershipRead
from app.services.authorization_service import Action, RequestContext
from app.services.registration import create_company_for_user

router = APIRouter(prefix="/api/companies", tags=["companies"])


@router.get("", response_model=List[MembershipRead])
def list_my_companies(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return (
        db.query(UserCompany)
        .options(joinedload(UserCompany.company))
        .filter(UserCompany.user_id == user.id)
        .order_by(UserCompany.created_at.asc())
        .all()
    )


@router.post("", response_model=MembershipRead, status_code=201)
def create_company(
    payload: CompanyCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return create_company_for_user(db, user=user, payload=payload)


@router.get("/{company_id}", response_model=CompanyRead)
def get_company(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    company = db.query(Company).filter(Company.id == context.effective_company_id).first()
    if company is None:
        raise NotFoundError("Empresa não encontrada")
    return company
