from __future__ import annotations

from datetime import datetime
from typing import Optional

from app.models.enums import ExpiryUrgency, InfrastructureService
from app.schemas.auth import UserSummary
from app.schemas.base import CamelModel, Money


class CostSummaryRead(CamelModel):
    monthly_total: Money
    annual_total: Money
    stored_annual_total: Money
    hardware_costs: Money
    license_costs: Money
    contract_costs: Money
    maintenance_costs: Money


class AssetCountsRead(CamelModel):
    total_assets: int
    physical_assets: int
    applications: int
    licenses: int
    contracts: int


class DashboardSummaryRead(CamelModel):
    costs: CostSummaryRead
    assets: AssetCountsRead


class ActivityRead(CamelModel):
    id: str
    company_id: str
    user_id: str
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    entity_name: Optional[str] = None
    details: Optional[str] = None
    created_at: datetime
    user: Optional[UserSummary] = None


class ExpiringServiceRead(CamelModel):
    asset_id: str
    asset_name: str
    service: InfrastructureService
    expiry: datetime
    urgency: ExpiryUrgency
    days_until_expiry: int
    assigned_technician_id: Optional[str] = None
