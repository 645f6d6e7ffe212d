from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.models.enums import MaintenancePriority, MaintenanceStatus, MaintenanceType
from app.schemas.base import CamelModel, Money


class MaintenanceCreate(CamelModel):
    company_id: str
    asset_id: str
    maintenance_type: MaintenanceType
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    vendor: Optional[str] = None
    cost: Decimal = Field(Decimal("0"), ge=0)
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    status: MaintenanceStatus = MaintenanceStatus.SCHEDULED
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    technician: Optional[str] = None
    parts_replaced: Optional[str] = None
    time_spent: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class MaintenanceUpdate(CamelModel):
    asset_id: Optional[str] = None
    maintenance_type: Optional[MaintenanceType] = None
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    vendor: Optional[str] = None
    cost: Optional[Decimal] = Field(None, ge=0)
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    status: Optional[MaintenanceStatus] = None
    priority: Optional[MaintenancePriority] = None
    technician: Optional[str] = None
    parts_replaced: Optional[str] = None
    time_spent: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class MaintenanceRead(CamelModel):
    id: str
    asset_id: str
    company_id: str
    maintenance_type: MaintenanceType
    title: str
    description: str
    vendor: Optional[str] = None
    cost: Money
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    status: MaintenanceStatus
    priority: MaintenancePriority
    technician: Optional[str] = None
    parts_replaced: Optional[str] = None
    time_spent: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
