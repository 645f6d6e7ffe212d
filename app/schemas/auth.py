from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from app.models.enums import CompanyPlan, UserRole
from app.schemas.base import CamelModel
from app.services.passwords import password_fits_bcrypt


class CompanyTaxFields(CamelModel):
    plan: CompanyPlan = CompanyPlan.PYME
    ruc: Optional[str] = Field(None, max_length=32)
    cedula: Optional[str] = Field(None, max_length=32)

    @model_validator(mode="after")
    def _tax_id_matches_plan(self):
        self.ruc = (self.ruc or "").strip() or None
        self.cedula = (self.cedula or "").strip() or None
        if self.plan == CompanyPlan.PYME:
            if not self.ruc:
                raise ValueError("RUC é obrigatório para o plano pyme")
            if self.cedula:
                raise ValueError("Plano pyme não aceita cédula")
        elif self.plan == CompanyPlan.PROFESSIONAL:
            if not self.cedula:
                raise ValueError("Cédula é obrigatória para o plano professional")
            if self.ruc:
                raise ValueError("Plano professional não aceita RUC")
        return self


class RegisterPayload(CompanyTaxFields):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    company_description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    company_email: Optional[EmailStr] = None

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if not password_fits_bcrypt(value):
            raise ValueError("Senha maior que 72 bytes")
        return value


class LoginPayload(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserRead(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    profile_image_url: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str


class LoginResponse(CamelModel):
    message: str
    user: UserRead
