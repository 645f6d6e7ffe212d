from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.deps import require_company_access
from app.schemas.dashboard import ActivityRead, DashboardSummaryRead, ExpiringServiceRead
from app.services.activity_log import DEFAULT_ACTIVITY_LIMIT, MAX_ACTIVITY_LIMIT, get_recent_activity
from app.services.authorization_service import Action, RequestContext
from app.services.cost_summary import get_asset_counts, get_company_cost_summary
from app.services.expiry_alerts import list_expiring_services

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/{company_id}/summary", response_model=DashboardSummaryRead)
def dashboard_summary(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    company_id = context.effective_company_id
    return {
        "costs": get_company_cost_summary(db, company_id),
        "assets": get_asset_counts(db, company_id),
    }


@router.get("/{company_id}/activity", response_model=List[ActivityRead])
def dashboard_activity(
    limit: int = Query(DEFAULT_ACTIVITY_LIMIT, ge=1, le=MAX_ACTIVITY_LIMIT),
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return get_recent_activity(db, context.effective_company_id, limit)


@router.get("/{company_id}/expiring", response_model=List[ExpiringServiceRead])
def dashboard_expiring(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    now = datetime.utcnow()
    return [
        {
            "asset_id": item.asset.id,
            "asset_name": item.asset.name,
            "service": item.service,
            "expiry": item.expiry,
            "urgency": item.urgency,
            "days_until_expiry": item.days_until(now),
            "assigned_technician_id": item.asset.assigned_technician_id,
        }
        for item in list_expiring_services(db, context.effective_company_id, now)
    ]
