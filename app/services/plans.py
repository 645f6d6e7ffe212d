from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.asset import Asset
from app.models.company import Company
from app.models.contract import Contract
from app.models.enums import AssetType, CompanyPlan
from app.models.license import License

PLAN_LIMIT_EXCEEDED = "plan_limit_exceeded"


@dataclass(frozen=True)
class PlanLimits:
    max_users: int
    max_assets: int
    max_applications: int
    max_contracts: int
    max_licenses: int
    has_technician_role: bool
    has_advanced_reports: bool
    has_api_access: bool


PLAN_LIMITS: dict[CompanyPlan, PlanLimits] = {
    CompanyPlan.PYME: PlanLimits(
        max_users=10,
        max_assets=500,
        max_applications=200,
        max_contracts=100,
        max_licenses=500,
        has_technician_role=True,
        has_advanced_reports=True,
        has_api_access=True,
    ),
    CompanyPlan.PROFESSIONAL: PlanLimits(
        max_users=50,
        max_assets=2000,
        max_applications=50,
        max_contracts=25,
        max_licenses=100,
        has_technician_role=False,
        has_advanced_reports=False,
        has_api_access=False,
    ),
}


def get_plan_limits(plan: CompanyPlan | str) -> PlanLimits:
    return PLAN_LIMITS[CompanyPlan(plan)]


def _raise_limit(resource: str, limit: int) -> None:
    raise ValidationError(
        f"Limite do plano atingido para {resource} ({limit})",
        kind=PLAN_LIMIT_EXCEEDED,
        errors=[{"field": resource, "message": f"limite {limit}"}],
    )


def ensure_can_create_asset(db: Session, company: Company, asset_type: AssetType | str) -> None:
    limits = get_plan_limits(company.plan)
    max_assets = company.max_assets or limits.max_assets
    total = db.query(Asset).filter(Asset.company_id == company.id).count()
    if total >= max_assets:
        _raise_limit("assets", max_assets)

    if AssetType(asset_type) == AssetType.APPLICATION:
        applications = (
            db.query(Asset)
            .filter(Asset.company_id == company.id, Asset.type == AssetType.APPLICATION.value)
            .count()
        )
        if applications >= limits.max_applications:
            _raise_limit("applications", limits.max_applications)


def ensure_can_create_contract(db: Session, company: Company) -> None:
    limits = get_plan_limits(company.plan)
    if db.query(Contract).filter(Contract.company_id == company.id).count() >= limits.max_contracts:
        _raise_limit("contracts", limits.max_contracts)


def ensure_can_create_license(db: Session, company: Company) -> None:
    limits = get_plan_limits(company.plan)
    if db.query(License).filter(License.company_id == company.id).count() >= limits.max_licenses:
        _raise_limit("licenses", limits.max_licenses)
