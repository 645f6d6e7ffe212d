from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, computed_field

from app.models.enums import AssetStatus
from app.schemas.base import CamelModel, Money
from app.services.derived_status import license_usage_percentage


class LicenseCreate(CamelModel):
    company_id: str
    asset_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    vendor: str = Field(..., min_length=1)
    license_key: Optional[str] = None
    license_type: Optional[str] = None
    max_users: Optional[int] = Field(None, ge=0)
    current_users: int = Field(0, ge=0)
    purchase_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    monthly_cost: Decimal = Field(Decimal("0"), ge=0)
    annual_cost: Decimal = Field(Decimal("0"), ge=0)
    status: AssetStatus = AssetStatus.ACTIVE
    notes: Optional[str] = None


class LicenseUpdate(CamelModel):
    asset_id: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    vendor: Optional[str] = Field(None, min_length=1)
    license_key: Optional[str] = None
    license_type: Optional[str] = None
    max_users: Optional[int] = Field(None, ge=0)
    current_users: Optional[int] = Field(None, ge=0)
    purchase_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    monthly_cost: Optional[Decimal] = Field(None, ge=0)
    annual_cost: Optional[Decimal] = Field(None, ge=0)
    status: Optional[AssetStatus] = None
    notes: Optional[str] = None


class LicenseRead(CamelModel):
    id: str
    company_id: str
    asset_id: Optional[str] = None
    name: str
    vendor: str
    license_key: Optional[str] = None
    license_type: Optional[str] = None
    max_users: Optional[int] = None
    current_users: int
    purchase_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    monthly_cost: Money
    annual_cost: Money
    status: AssetStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="usagePercentage")
    @property
    def usage_percentage(self) -> float:
        return license_usage_percentage(self.current_users, self.max_users)
