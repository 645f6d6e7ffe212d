from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, computed_field, model_validator

from app.models.enums import ContractDisplayStatus, ContractStatus
from app.schemas.base import CamelModel, Money
from app.services.derived_status import contract_display_status, days_until


class ContractCreate(CamelModel):
    company_id: str
    name: str = Field(..., min_length=1)
    vendor: str = Field(..., min_length=1)
    description: Optional[str] = None
    contract_type: str = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime
    renewal_date: Optional[datetime] = None
    monthly_cost: Decimal = Field(Decimal("0"), ge=0)
    annual_cost: Decimal = Field(Decimal("0"), ge=0)
    status: ContractStatus = ContractStatus.ACTIVE
    auto_renewal: bool = False
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate deve ser posterior a startDate")
        return self


class ContractUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    vendor: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    contract_type: Optional[str] = Field(None, min_length=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    renewal_date: Optional[datetime] = None
    monthly_cost: Optional[Decimal] = Field(None, ge=0)
    annual_cost: Optional[Decimal] = Field(None, ge=0)
    status: Optional[ContractStatus] = None
    auto_renewal: Optional[bool] = None
    notes: Optional[str] = None


class ContractRead(CamelModel):
    id: str
    company_id: str
    name: str
    vendor: str
    description: Optional[str] = None
    contract_type: str
    start_date: datetime
    end_date: datetime
    renewal_date: Optional[datetime] = None
    monthly_cost: Money
    annual_cost: Money
    status: ContractStatus
    auto_renewal: bool
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="displayStatus")
    @property
    def display_status(self) -> ContractDisplayStatus:
        return contract_display_status(self.status, self.end_date)

    @computed_field(alias="daysUntilExpiry")
    @property
    def days_until_expiry(self) -> int:
        return days_until(self.end_date, datetime.utcnow())
