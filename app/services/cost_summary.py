from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.asset import Asset
from app.models.contract import Contract
from app.models.enums import AssetType
from app.models.license import License
from app.models.maintenance_record import MaintenanceRecord
from app.schemas.base import quantize_money

MONTHS_PER_YEAR = Decimal("12")


@dataclass(frozen=True)
class CostSummary:
    monthly_total: Decimal
    annual_total: Decimal
    stored_annual_total: Decimal
    hardware_costs: Decimal
    license_costs: Decimal
    contract_costs: Decimal
    maintenance_costs: Decimal


@dataclass(frozen=True)
class AssetCounts:
    total_assets: int
    physical_assets: int
    applications: int
    licenses: int
    contracts: int


def _sum(db: Session, column, company_column, company_id: str) -> Decimal:
    value = db.query(func.coalesce(func.sum(column), 0)).filter(company_column == company_id).scalar()
    return Decimal(str(value or 0))


def get_company_cost_summary(db: Session, company_id: str) -> CostSummary:
    asset_monthly = _sum(db, Asset.monthly_cost, Asset.company_id, company_id)
    license_monthly = _sum(db, License.monthly_cost, License.company_id, company_id)
    contract_monthly = _sum(db, Contract.monthly_cost, Contract.company_id, company_id)
    # Manutenção só tem custo pontual: o total histórico é rateado em 12 meses.
    maintenance_total = _sum(db, MaintenanceRecord.cost, MaintenanceRecord.company_id, company_id)
    maintenance_monthly = maintenance_total / MONTHS_PER_YEAR

    monthly_total = asset_monthly + license_monthly + contract_monthly + maintenance_monthly
    stored_annual_total = (
        _sum(db, Asset.annual_cost, Asset.company_id, company_id)
        + _sum(db, License.annual_cost, License.company_id, company_id)
        + _sum(db, Contract.annual_cost, Contract.company_id, company_id)
        + maintenance_total
    )

    return CostSummary(
        monthly_total=quantize_money(monthly_total),
        annual_total=quantize_money(monthly_total * MONTHS_PER_YEAR),
        stored_annual_total=quantize_money(stored_annual_total),
        hardware_costs=quantize_money(asset_monthly),
        license_costs=quantize_money(license_monthly),
        contract_costs=quantize_money(contract_monthly),
        maintenance_costs=quantize_money(maintenance_monthly),
    )


def get_asset_counts(db: Session, company_id: str) -> AssetCounts:
    rows = (
        db.query(Asset.type, func.count(Asset.id))
        .filter(Asset.company_id == company_id)
        .group_by(Asset.type)
        .all()
    )
    by_type = {asset_type: count for asset_type, count in rows}
    physical = int(by_type.get(AssetType.PHYSICAL.value, 0))
    applications = int(by_type.get(AssetType.APPLICATION.value, 0))

    return AssetCounts(
        total_assets=physical + applications,
        physical_assets=physical,
        applications=applications,
        licenses=db.query(License).filter(License.company_id == company_id).count(),
        contracts=db.query(Contract).filter(Contract.company_id == company_id).count(),
    )
