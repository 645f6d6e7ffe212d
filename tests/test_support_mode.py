from app.models.activity_log import ActivityLog
from app.models.asset import Asset
from app.models.enums import UserRole
from app.routers.admin import router as admin_router
from app.routers.assets import router as assets_router
from app.routers.auth import router as auth_router
from tests.app_factory import add_company, add_user, build_client, build_session, login_as


def _build_client():
    db = build_session()
    client = build_client(db, auth_router, admin_router, assets_router)
    admin = add_user(db, email="root@itam.com", role=UserRole.SUPER_ADMIN, password="admin123")
    company_a = add_company(db, name="Empresa A", ruc="A-001")
    company_b = add_company(db, name="Empresa B", ruc="B-001")
    db.add_all(
        [
            Asset(company_id=company_a.id, name="Ativo A", type="physical"),
            Asset(company_id=company_b.id, name="Ativo B", type="physical"),
        ]
    )
    db.commit()
    response = client.post("/api/login", json={"email": "root@itam.com", "password": "admin123"})
    assert response.status_code == 200
    return client, db, admin, company_a, company_b


def test_support_mode_scopes_requests_to_target_company():
    client, db, admin, company_a, company_b = _build_client()

    entered = client.post(f"/api/admin/support-access/{company_a.id}")
    assert entered.status_code == 200
    assert entered.json()["supportMode"] is True
    assert entered.json()["company"]["id"] == company_a.id

    # O override prevalece mesmo pedindo outra empresa na URL.
    listed = client.get(f"/api/assets/{company_b.id}")
    assert listed.status_code == 200
    assert [item["name"] for item in listed.json()] == ["Ativo A"]

    status = client.get("/api/admin/support-status")
    assert status.json()["supportMode"] is True
    assert status.json()["company"]["id"] == company_a.id
    assert status.json()["startTime"] is not None

    log = db.query(ActivityLog).filter(ActivityLog.action == "accessed").one()
    assert log.company_id == company_a.id
    assert log.user_id == admin.id
    assert log.entity_name == "Support access to Empresa A"


def test_exit_support_restores_plain_session():
    client, db, _admin, company_a, company_b = _build_client()
    client.post(f"/api/admin/support-access/{company_a.id}")

    exited = client.post("/api/admin/exit-support")

    assert exited.status_code == 200
    assert exited.json()["supportMode"] is False
    assert client.get("/api/admin/support-status").json() == {
        "supportMode": False,
        "company": None,
        "startTime": None,
    }
    listed = client.get(f"/api/assets/{company_b.id}")
    assert [item["name"] for item in listed.json()] == ["Ativo B"]
    assert db.query(ActivityLog).filter(ActivityLog.action == "exited").count() == 1


def test_support_access_rejects_inactive_or_missing_company():
    client, db, _admin, _company_a, _company_b = _build_client()
    inactive = add_company(db, name="Inativa", ruc="I-001", is_active=False)

    response = client.post(f"/api/admin/support-access/{inactive.id}")
    assert response.status_code == 422
    assert response.json()["kind"] == "company_inactive"

    assert client.post("/api/admin/support-access/nao-existe").status_code == 404
    assert client.get("/api/admin/support-status").json()["supportMode"] is False


def test_admin_endpoints_require_super_admin():
    db = build_session()
    client = build_client(db, admin_router)
    company = add_company(db, ruc="A-001")
    owner = add_user(db, email="owner@a.com", role=UserRole.MANAGER_OWNER, company=company)
    login_as(client, owner)

    assert client.get("/api/admin/companies").status_code == 403
    assert client.post(f"/api/admin/support-access/{company.id}").status_code == 403

    # Modo suporte forjado num cookie de não-admin é ignorado.
    login_as(client, owner, support_mode={"company_id": company.id, "admin_id": owner.id, "start_time": "x"})
    assert client.get("/api/admin/support-status").status_code == 403


def test_admin_can_change_plan_and_status():
    client, db, _admin, company_a, _company_b = _build_client()

    plan = client.put(f"/api/admin/companies/{company_a.id}/plan", json={"plan": "professional", "cedula": "1712345678"})
    assert plan.status_code == 200
    assert plan.json()["plan"] == "professional"
    assert plan.json()["cedula"] == "1712345678"
    assert plan.json()["ruc"] is None
    assert plan.json()["maxUsers"] == 50
    assert plan.json()["maxAssets"] == 2000

    status = client.put(f"/api/admin/companies/{company_a.id}/status", json={"isActive": False})
    assert status.status_code == 200
    assert status.json()["isActive"] is False

    companies = client.get("/api/admin/companies")
    assert {item["name"] for item in companies.json()} == {"Empresa A", "Empresa B"}
    assert db.query(ActivityLog).filter(ActivityLog.action == "updated").count() == 2


def test_plan_change_requires_matching_tax_id():
    client, db, _admin, company_a, _company_b = _build_client()

    missing = client.put(f"/api/admin/companies/{company_a.id}/plan", json={"plan": "professional"})
    assert missing.status_code == 422
    assert missing.json()["errors"] == [{"field": "cedula", "message": "campo obrigatório"}]
    db.refresh(company_a)
    assert (company_a.plan, company_a.ruc, company_a.cedula) == ("pyme", "A-001", None)

    moved = client.put(
        f"/api/admin/companies/{company_a.id}/plan",
        json={"plan": "professional", "cedula": "1700000009"},
    )
    assert moved.status_code == 200

    back = client.put(f"/api/admin/companies/{company_a.id}/plan", json={"plan": "pyme", "ruc": "A-002"})
    assert back.status_code == 200
    assert (back.json()["ruc"], back.json()["cedula"]) == ("A-002", None)


def test_plan_change_with_taken_ruc_is_a_conflict():
    client, _db, _admin, company_a, company_b = _build_client()
    client.put(f"/api/admin/companies/{company_a.id}/plan", json={"plan": "professional", "cedula": "1700000009"})

    response = client.put(f"/api/admin/companies/{company_a.id}/plan", json={"plan": "pyme", "ruc": "B-001"})

    assert response.status_code == 409
    assert response.json()["kind"] == "conflict"
