from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.metrics import request_metrics
from app.deps import require_super_admin
from app.models.user import User

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


@router.get("")
def endpoint_metrics(_user: User = Depends(require_super_admin)):
    return {"endpoints": request_metrics.snapshot()}


@router.get("/companies")
def company_metrics(_user: User = Depends(require_super_admin)):
    return {"companies": request_metrics.snapshot_per_company()}
