from datetime import datetime

from app.models.asset import Asset
from app.models.enums import UserRole
from app.models.license import License
from app.models.maintenance_record import MaintenanceRecord
from app.routers.assets import router as assets_router
from app.routers.licenses import router as licenses_router
from app.routers.maintenance import router as maintenance_router
from tests.app_factory import add_company, add_user, build_client, build_session, login_as
from tests.fixtures_data import (
    APPLICATION_ASSET_PAYLOAD,
    LICENSE_PAYLOAD,
    MAINTENANCE_PAYLOAD,
    PHYSICAL_ASSET_PAYLOAD,
)


def _build_client(**company_values):
    db = build_session()
    client = build_client(db, assets_router, licenses_router, maintenance_router)
    company = add_company(db, name="Empresa", ruc="R-001", **company_values)
    owner = add_user(db, email="owner@empresa.com", role=UserRole.MANAGER_OWNER, company=company)
    login_as(client, owner)
    return client, db, company, owner


def test_create_physical_asset_clears_application_fields():
    client, _db, company, _owner = _build_client()
    payload = {
        **PHYSICAL_ASSET_PAYLOAD,
        "companyId": company.id,
        "url": "https://nao-deveria.example.com",
        "domainCost": 99,
    }

    response = client.post("/api/assets", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["companyId"] == company.id
    assert body["type"] == "physical"
    assert body["url"] is None
    assert body["domainCost"] == 0
    assert body["monthlyCost"] == 100.0
    assert body["annualCost"] == 1200.0


def test_list_filters_by_type_newest_first():
    client, _db, company, _owner = _build_client()
    client.post("/api/assets", json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id})
    client.post("/api/assets", json={**APPLICATION_ASSET_PAYLOAD, "companyId": company.id})

    everything = client.get(f"/api/assets/{company.id}")
    assert [item["name"] for item in everything.json()] == ["Portal Clientes", "Servidor Dell R740"]

    apps = client.get(f"/api/assets/{company.id}", params={"type": "application"})
    assert [item["name"] for item in apps.json()] == ["Portal Clientes"]
    assert apps.json()[0]["applicationType"] == "custom_development"


def test_partial_update_keeps_other_fields_and_refreshes_timestamp():
    client, db, company, _owner = _build_client()
    created = client.post("/api/assets", json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id}).json()
    asset = db.query(Asset).filter(Asset.id == created["id"]).one()
    asset.updated_at = datetime(2020, 1, 1)
    db.commit()

    response = client.put(
        f"/api/assets/{created['id']}",
        params={"companyId": company.id},
        json={"location": "Rack 2"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["location"] == "Rack 2"
    assert body["serialNumber"] == "SN-001"
    assert body["monthlyCost"] == 100.0
    assert body["createdAt"] == created["createdAt"]
    assert datetime.fromisoformat(body["updatedAt"]) > datetime(2020, 1, 1)


def test_update_rejects_null_on_required_field():
    client, _db, company, _owner = _build_client()
    created = client.post("/api/assets", json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id}).json()

    response = client.put(
        f"/api/assets/{created['id']}",
        params={"companyId": company.id},
        json={"name": None},
    )

    assert response.status_code == 422
    assert response.json()["errors"] == [{"field": "name", "message": "campo obrigatório"}]


def test_assigned_technician_must_belong_to_company():
    client, db, company, _owner = _build_client()
    outsider = add_user(db, email="fora@outra.com")

    response = client.post(
        "/api/assets",
        json={**APPLICATION_ASSET_PAYLOAD, "companyId": company.id, "assignedTechnicianId": outsider.id},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "assignedTechnicianId"


def test_asset_plan_limit_is_enforced():
    client, _db, company, _owner = _build_client(max_assets=1)
    assert client.post("/api/assets", json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id}).status_code == 201

    response = client.post("/api/assets", json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id})

    assert response.status_code == 422
    assert response.json()["kind"] == "plan_limit_exceeded"


def test_delete_asset_detaches_licenses_and_removes_maintenance():
    client, db, company, _owner = _build_client()
    asset_id = client.post("/api/assets", json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id}).json()["id"]
    license_response = client.post(
        "/api/licenses",
        json={**LICENSE_PAYLOAD, "companyId": company.id, "assetId": asset_id},
    )
    assert license_response.status_code == 201
    maintenance_response = client.post(
        "/api/maintenance",
        json={**MAINTENANCE_PAYLOAD, "companyId": company.id, "assetId": asset_id},
    )
    assert maintenance_response.status_code == 201

    assert client.delete(f"/api/assets/{asset_id}/{company.id}").status_code == 200

    db.expire_all()
    assert db.query(MaintenanceRecord).count() == 0
    license_ = db.query(License).one()
    assert license_.asset_id is None


def test_maintenance_requires_asset_in_same_company():
    client, db, company, _owner = _build_client()
    other = add_company(db, name="Outra", ruc="R-002")
    foreign = Asset(company_id=other.id, name="Alheio", type="physical")
    db.add(foreign)
    db.commit()

    response = client.post(
        "/api/maintenance",
        json={**MAINTENANCE_PAYLOAD, "companyId": company.id, "assetId": foreign.id},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "assetId"
    assert db.query(MaintenanceRecord).count() == 0


def test_maintenance_history_per_asset():
    client, _db, company, _owner = _build_client()
    first = client.post("/api/assets", json={**PHYSICAL_ASSET_PAYLOAD, "companyId": company.id}).json()["id"]
    second = client.post("/api/assets", json={**APPLICATION_ASSET_PAYLOAD, "companyId": company.id}).json()["id"]
    client.post("/api/maintenance", json={**MAINTENANCE_PAYLOAD, "companyId": company.id, "assetId": first})
    client.post(
        "/api/maintenance",
        json={**MAINTENANCE_PAYLOAD, "companyId": company.id, "assetId": second, "title": "Renovar SSL"},
    )

    response = client.get(f"/api/maintenance/asset/{first}/{company.id}")

    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Limpieza anual"]
    assert response.json()[0]["cost"] == 1200.0


def test_update_rejects_null_type():
    client, db, company, _owner = _build_client()
    created = client.post("/api/assets", json={**APPLICATION_ASSET_PAYLOAD, "companyId": company.id}).json()

    response = client.put(
        f"/api/assets/{created['id']}",
        params={"companyId": company.id},
        json={"type": None},
    )

    assert response.status_code == 422
    assert response.json()["kind"] == "validation_error"
    assert response.json()["errors"] == [{"field": "type", "message": "campo obrigatório"}]
    assert db.query(Asset).one().type == "application"
