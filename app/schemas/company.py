from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.models.enums import CompanyPlan, UserRole
from app.schemas.auth import CompanyTaxFields, UserRead
from app.schemas.base import CamelModel


class CompanyRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    plan: CompanyPlan
    max_users: int
    max_assets: int
    is_active: bool
    ruc: Optional[str] = None
    cedula: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CompanyCreate(CompanyTaxFields):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class MembershipRead(CamelModel):
    id: str
    user_id: str
    company_id: str
    role: UserRole
    created_at: datetime
    company: CompanyRead


class TechnicianRead(CamelModel):
    id: str
    user_id: str
    company_id: str
    role: UserRole
    user: UserRead


class RegisterResponse(CamelModel):
    message: str
    company: CompanyRead
    user: UserRead


class AdminPlanUpdate(CamelModel):
    plan: CompanyPlan
    ruc: Optional[str] = Field(None, max_length=32)
    cedula: Optional[str] = Field(None, max_length=32)
    max_users: Optional[int] = Field(None, ge=1)
    max_assets: Optional[int] = Field(None, ge=1)


class AdminStatusUpdate(CamelModel):
    is_active: bool


class SupportStatusRead(CamelModel):
    support_mode: bool
    company: Optional[CompanyRead] = None
    start_time: Optional[datetime] = None
