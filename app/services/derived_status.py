from __future__ import annotations

import math
from datetime import datetime

from app.models.enums import ContractDisplayStatus, ContractStatus

EXPIRING_SOON_DAYS = 30


def days_until(target: datetime, now: datetime) -> int:
    return math.ceil((target - now).total_seconds() / 86400)


def contract_display_status(status: str, end_date: datetime, now: datetime | None = None) -> ContractDisplayStatus:
    now = now or datetime.utcnow()
    persisted = ContractStatus(status)
    if persisted == ContractStatus.EXPIRED:
        return ContractDisplayStatus.EXPIRED
    if persisted == ContractStatus.CANCELLED:
        return ContractDisplayStatus.CANCELLED
    remaining = days_until(end_date, now)
    if 0 < remaining <= EXPIRING_SOON_DAYS:
        return ContractDisplayStatus.EXPIRING_SOON
    return ContractDisplayStatus(persisted.value)


def license_usage_percentage(current_users: int | None, max_users: int | None) -> float:
    if not max_users:
        return 0.0
    return round(min((current_users or 0) / max_users * 100, 100.0), 2)
