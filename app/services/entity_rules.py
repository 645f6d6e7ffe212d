from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.asset import Asset
from app.models.enums import AssetType
from app.models.user_company import UserCompany

# Campos de infraestrutura só valem para aplicações.
APPLICATION_ONLY_DEFAULTS: dict[str, Any] = {
    "application_type": None,
    "url": None,
    "version": None,
    "domain_cost": Decimal("0"),
    "ssl_cost": Decimal("0"),
    "hosting_cost": Decimal("0"),
    "server_cost": Decimal("0"),
    "domain_expiry": None,
    "ssl_expiry": None,
    "hosting_expiry": None,
    "server_expiry": None,
    "assigned_technician_id": None,
}


def normalize_asset_values(values: dict[str, Any], asset_type: AssetType | str) -> dict[str, Any]:
    if AssetType(asset_type) == AssetType.PHYSICAL:
        return {**values, **APPLICATION_ONLY_DEFAULTS}
    return values


def ensure_asset_in_company(db: Session, company_id: str, asset_id: str | None, *, field: str = "assetId") -> None:
    if asset_id is None:
        return
    exists = db.query(Asset.id).filter(Asset.id == asset_id, Asset.company_id == company_id).first()
    if exists is None:
        raise ValidationError(
            "Ativo não pertence à empresa",
            errors=[{"field": field, "message": "ativo inexistente nesta empresa"}],
        )


def ensure_company_member(db: Session, company_id: str, user_id: str | None, *, field: str) -> None:
    if user_id is None:
        return
    membership = (
        db.query(UserCompany.id)
        .filter(UserCompany.company_id == company_id, UserCompany.user_id == user_id)
        .first()
    )
    if membership is None:
        raise ValidationError(
            "Usuário não é membro da empresa",
            errors=[{"field": field, "message": "usuário inexistente nesta empresa"}],
        )
