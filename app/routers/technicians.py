from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload

from app.core.database import get_db
from app.deps import require_company_access
from app.models.enums import UserRole
from app.models.user_company import UserCompany
from app.schemas.company import TechnicianRead
from app.services.authorization_service import Action, RequestContext

router = APIRouter(prefix="/api/technicians", tags=["technicians"])


@router.get("/{company_id}", response_model=List[TechnicianRead])
def list_technicians(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return (
        db.query(UserCompany)
        .options(joinedload(UserCompany.user))
        .filter(
            UserCompany.company_id == context.effective_company_id,
            UserCompany.role == UserRole.TECHNICIAN.value,
        )
        .order_by(UserCompany.created_at.asc())
        .all()
    )
