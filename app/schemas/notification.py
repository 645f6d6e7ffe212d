from __future__ import annotations

from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel


class NotificationRead(CamelModel):
    id: str
    company_id: str
    user_id: str
    title: str
    message: str
    type: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    is_read: bool
    created_at: datetime


class UnreadCountRead(CamelModel):
    count: int


class ExpiryAlertsRunRead(CamelModel):
    success: bool
    created: int
