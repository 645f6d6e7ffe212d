from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.models.enums import ApplicationType, AssetStatus, AssetType
from app.schemas.base import CamelModel, Money


class AssetFields(CamelModel):
    description: Optional[str] = None
    serial_number: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    purchase_date: Optional[datetime] = None
    warranty_expiry: Optional[datetime] = None
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    application_type: Optional[ApplicationType] = None
    url: Optional[str] = None
    version: Optional[str] = None
    domain_expiry: Optional[datetime] = None
    ssl_expiry: Optional[datetime] = None
    hosting_expiry: Optional[datetime] = None
    server_expiry: Optional[datetime] = None
    assigned_technician_id: Optional[str] = None


class AssetCreate(AssetFields):
    company_id: str
    name: str = Field(..., min_length=1)
    type: AssetType = AssetType.PHYSICAL
    status: AssetStatus = AssetStatus.ACTIVE
    monthly_cost: Decimal = Field(Decimal("0"), ge=0)
    annual_cost: Decimal = Field(Decimal("0"), ge=0)
    domain_cost: Decimal = Field(Decimal("0"), ge=0)
    ssl_cost: Decimal = Field(Decimal("0"), ge=0)
    hosting_cost: Decimal = Field(Decimal("0"), ge=0)
    server_cost: Decimal = Field(Decimal("0"), ge=0)


class AssetUpdate(AssetFields):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[AssetType] = None
    status: Optional[AssetStatus] = None
    monthly_cost: Optional[Decimal] = Field(None, ge=0)
    annual_cost: Optional[Decimal] = Field(None, ge=0)
    domain_cost: Optional[Decimal] = Field(None, ge=0)
    ssl_cost: Optional[Decimal] = Field(None, ge=0)
    hosting_cost: Optional[Decimal] = Field(None, ge=0)
    server_cost: Optional[Decimal] = Field(None, ge=0)


class AssetRead(AssetFields):
    id: str
    company_id: str
    name: str
    type: AssetType
    status: AssetStatus
    monthly_cost: Money
    annual_cost: Money
    domain_cost: Money
    ssl_cost: Money
    hosting_cost: Money
    server_cost: Money
    created_at: datetime
    updated_at: datetime
