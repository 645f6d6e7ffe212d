from datetime import datetime, timedelta
from decimal import Decimal

from app.models.asset import Asset
from app.models.contract import Contract
from app.models.enums import UserRole
from app.models.license import License
from app.models.maintenance_record import MaintenanceRecord
from app.routers.assets import router as assets_router
from app.routers.dashboard import router as dashboard_router
from app.services.activity_log import clamp_activity_limit
from app.services.cost_summary import get_asset_counts, get_company_cost_summary
from tests.app_factory import add_company, add_user, build_client, build_session, login_as
from tests.fixtures_data import PHYSICAL_ASSET_PAYLOAD


def _seed_costs(db, company):
    asset = Asset(company_id=company.id, name="Servidor", type="physical", monthly_cost=200, annual_cost=2400)
    app_asset = Asset(
        company_id=company.id, name="Portal", type="application", monthly_cost=100, annual_cost=1200
    )
    db.add_all([asset, app_asset])
    db.flush()
    db.add_all(
        [
            License(company_id=company.id, name="ERP", vendor="SAP", monthly_cost=50, annual_cost=600),
            Contract(
                company_id=company.id,
                name="Soporte",
                vendor="NetCorp",
                contract_type="support",
                start_date=datetime(2026, 1, 1),
                end_date=datetime(2027, 1, 1),
                monthly_cost=30,
                annual_cost=360,
            ),
            MaintenanceRecord(
                company_id=company.id,
                asset_id=asset.id,
                maintenance_type="corrective",
                title="Troca de disco",
                description="Disco substituído",
                cost=1200,
            ),
        ]
    )
    db.commit()


def test_cost_summary_spreads_maintenance_over_twelve_months():
    db = build_session()
    company = add_company(db, ruc="R-1")
    _seed_costs(db, company)

    summary = get_company_cost_summary(db, company.id)

    assert summary.monthly_total == Decimal("480.00")
    assert summary.annual_total == Decimal("5760.00")
    assert summary.stored_annual_total == Decimal("5760.00")
    assert summary.hardware_costs == Decimal("300.00")
    assert summary.license_costs == Decimal("50.00")
    assert summary.contract_costs == Decimal("30.00")
    assert summary.maintenance_costs == Decimal("100.00")


def test_cost_summary_of_empty_company_is_zero():
    db = build_session()
    company = add_company(db, ruc="R-1")

    summary = get_company_cost_summary(db, company.id)
    counts = get_asset_counts(db, company.id)

    assert summary.monthly_total == Decimal("0.00")
    assert summary.annual_total == Decimal("0.00")
    assert (counts.total_assets, counts.physical_assets, counts.applications) == (0, 0, 0)
    assert (counts.licenses, counts.contracts) == (0, 0)


def test_cost_summary_ignores_other_companies():
    db = build_session()
    company = add_company(db, ruc="R-1")
    other = add_company(db, name="Outra", ruc="R-2")
    _seed_costs(db, other)

    assert get_company_cost_summary(db, company.id).monthly_total == Decimal("0.00")


def test_dashboard_summary_endpoint_serializes_numbers():
    db = build_session()
    client = build_client(db, dashboard_router)
    company = add_company(db, ruc="R-1")
    user = add_user(db, email="tec@empresa.com", role=UserRole.TECHNICIAN, company=company)
    _seed_costs(db, company)
    login_as(client, user)

    response = client.get(f"/api/dashboard/{company.id}/summary")

    assert response.status_code == 200
    body = response.json()
    assert body["costs"]["monthlyTotal"] == 480.0
    assert body["costs"]["annualTotal"] == 5760.0
    assert body["costs"]["maintenanceCosts"] == 100.0
    assert body["assets"] == {
        "totalAssets": 2,
        "physicalAssets": 1,
        "applications": 1,
        "licenses": 1,
        "contracts": 1,
    }


def test_recent_activity_is_newest_first_and_limited():
    db = build_session()
    client = build_client(db, assets_router, dashboard_router)
    company = add_company(db, ruc="R-1")
    owner = add_user(db, email="owner@empresa.com", role=UserRole.MANAGER_OWNER, company=company)
    login_as(client, owner)
    for index in range(3):
        client.post(
            "/api/assets",
            json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id, "name": f"Ativo {index}"},
        )

    response = client.get(f"/api/dashboard/{company.id}/activity", params={"limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert [item["entityName"] for item in body] == ["Ativo 2", "Ativo 1"]
    assert body[0]["action"] == "created"
    assert body[0]["user"]["email"] == "owner@empresa.com"


def test_activity_limit_is_clamped():
    assert clamp_activity_limit(0) == 1
    assert clamp_activity_limit(500) == 100
    assert clamp_activity_limit(None) == 10


def test_expiring_endpoint_lists_application_services():
    db = build_session()
    client = build_client(db, dashboard_router)
    company = add_company(db, ruc="R-1")
    user = add_user(db, email="owner@empresa.com", role=UserRole.MANAGER_OWNER, company=company)
    soon = datetime.utcnow() + timedelta(days=3)
    db.add(Asset(company_id=company.id, name="Portal", type="application", ssl_expiry=soon))
    db.add(Asset(company_id=company.id, name="Servidor", type="physical", ssl_expiry=soon))
    db.commit()
    login_as(client, user)

    response = client.get(f"/api/dashboard/{company.id}/expiring")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["assetName"] == "Portal"
    assert body[0]["service"] == "ssl"
    assert body[0]["urgency"] == "critical"
    assert body[0]["daysUntilExpiry"] == 3
