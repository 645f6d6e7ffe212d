from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session, joinedload

from app.models.activity_log import ActivityLog
from app.models.enums import ActivityAction

DEFAULT_ACTIVITY_LIMIT = 10
MAX_ACTIVITY_LIMIT = 100


def log_activity(
    db: Session,
    *,
    company_id: str,
    user_id: str,
    action: ActivityAction | str,
    entity_type: str,
    entity_id: Optional[str] = None,
    entity_name: Optional[str] = None,
    details: Optional[Mapping[str, Any] | str] = None,
) -> ActivityLog:
    """Add an audit row to the current unit of work; the caller commits."""
    if isinstance(details, Mapping):
        details = json.dumps(details, default=str, ensure_ascii=False)
    entry = ActivityLog(
        company_id=company_id,
        user_id=user_id,
        action=ActivityAction(action).value,
        entity_type=entity_type,
        entity_id=entity_id,
        entity_name=entity_name,
        details=details,
    )
    db.add(entry)
    return entry


def clamp_activity_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_ACTIVITY_LIMIT
    return max(1, min(int(limit), MAX_ACTIVITY_LIMIT))


def get_recent_activity(db: Session, company_id: str, limit: int | None = DEFAULT_ACTIVITY_LIMIT) -> list[ActivityLog]:
    return (
        db.query(ActivityLog)
        .options(joinedload(ActivityLog.user))
        .filter(ActivityLog.company_id == company_id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(clamp_activity_limit(limit))
        .all()
    )
