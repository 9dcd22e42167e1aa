import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from models import DailyConsumption
from services.seeder import seed_users_if_empty


USERS = [
    ("admin", "admin123", "admin"),
    ("operador", "operador123", "operator"),
    ("leitura", "leitura123", "readonly"),
]


@pytest.fixture
async def client(db, reports_dir):
    await seed_users_if_empty(USERS, logger=lambda msg: None)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def login(client, username, password):
    r = await client.post("/login/access-token", data={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


async def test_login_failure(client):
    r = await client.post("/login/access-token", data={"username": "admin", "password": "wrong"})
    assert r.status_code == 401


async def test_me_carries_profile(client):
    headers = await login(client, "operador", "operador123")
    r = await client.get("/users/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["profile"] == "operator"


async def test_refresh_token(client):
    r = await client.post("/login/access-token", data={"username": "leitura", "password": "leitura123"})
    r = await client.post("/login/refresh-token", json={"refresh_token": r.json()["refresh_token"]})
    assert r.status_code == 200
    assert r.json()["token_type"] == "bearer"


async def test_endpoints_require_login(client):
    for path in ("/api/devices", "/api/consumption/PAC_01", "/api/ranking/monthly/2026-01",
                 "/api/reports/monthly/pdf/2026-01"):
        r = await client.get(path)
        assert r.status_code == 401, path


async def test_devices_and_consumption(client, add_day):
    headers = await login(client, "leitura", "leitura123")
    await add_day("PAC_01", "2026-01-02", 3.0)
    await add_day("PAC_01", "2026-01-01", 1.0)

    r = await client.get("/api/devices", headers=headers)
    assert [d["id"] for d in r.json()] == ["PAC_01", "PAC_02", "PAC_03"]

    r = await client.get("/api/consumption/PAC_01", headers=headers)
    assert [row["day"] for row in r.json()] == ["2026-01-01", "2026-01-02"]

    r = await client.get("/api/consumption/NOPE", headers=headers)
    assert r.status_code == 404


async def test_monthly_ranking_json(client, add_day):
    headers = await login(client, "leitura", "leitura123")
    await add_day("PAC_01", "2026-01-01", 10.0)
    await add_day("PAC_01", "2026-01-02", 5.5)
    await add_day("PAC_03", "2026-01-01", 20.0)

    r = await client.get("/api/ranking/monthly/2026-01", headers=headers)
    assert r.status_code == 200
    assert r.json() == {
        "month": "2026-01",
        "ranking": [
            {"position": 1, "name": "SECADOR", "consumption": 20.0},
            {"position": 2, "name": "TRAFO 1", "consumption": 15.5},
        ],
    }

    r = await client.get("/api/ranking/monthly/2026-13", headers=headers)
    assert r.status_code == 422


async def test_monthly_pdf_streams_and_saves_copy(client, reports_dir, add_day):
    headers = await login(client, "operador", "operador123")
    await add_day("PAC_02", "2026-01-01", 4.0)

    r = await client.get("/api/reports/monthly/pdf/2026-01", headers=headers)
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert "Monthly_Report_2026-01.pdf" in r.headers["content-disposition"]
    saved = list(reports_dir.glob("Monthly_Report_2026-01_*.pdf"))
    assert len(saved) == 1
    assert saved[0].read_bytes() == r.content


async def test_comparison_pdf_is_admin_only(client, reports_dir):
    path = "/api/reports/compare/pdf/PAC_01/2026-01/2026-02"
    headers = await login(client, "operador", "operador123")
    r = await client.get(path, headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Access denied"

    headers = await login(client, "admin", "admin123")
    r = await client.get(path, headers=headers)
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")
    assert len(list(reports_dir.glob("Comparison_PAC_01_2026-01_2026-02_*.pdf"))) == 1

    r = await client.get("/api/reports/compare/pdf/NOPE/2026-01/2026-02", headers=headers)
    assert r.status_code == 404


async def test_report_store_failure_is_generic(client, monkeypatch):
    from errors import StoreError
    from services import store

    async def broken(month):
        raise StoreError("sum", "secret path /var/db locked")

    monkeypatch.setattr(store, "sum_by_device", broken)
    headers = await login(client, "admin", "admin123")
    r = await client.get("/api/reports/monthly/pdf/2026-01", headers=headers)
    assert r.status_code == 500
    assert "secret" not in r.text


async def test_manual_accumulate(client, scripted_source):
    app.state.reading_source = scripted_source(
        {"PAC_01": [1000.0, 1002.0], "PAC_02": [500.0, 500.5], "PAC_03": [10.0, 10.25]}
    )
    headers = await login(client, "admin", "admin123")
    r = await client.post("/admin/tasks/accumulate", headers=headers)
    assert r.json() == {"created": 3, "updated": 0, "failed": 0}
    r = await client.post("/admin/tasks/accumulate", headers=headers)
    assert r.json() == {"created": 0, "updated": 3, "failed": 0}
    rec = await DailyConsumption.get(device_id="PAC_01")
    assert rec.consumption == 2.0

    headers = await login(client, "leitura", "leitura123")
    r = await client.post("/admin/tasks/accumulate", headers=headers)
    assert r.status_code == 403


async def test_pdf_still_streams_when_copy_cannot_be_saved(client, add_day, tmp_path, monkeypatch, caplog):
    from services import config

    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    monkeypatch.setattr(config, "REPORTS_DIR", str(blocker / "reports"))
    headers = await login(client, "admin", "admin123")
    await add_day("PAC_01", "2026-01-01", 2.0)

    r = await client.get("/api/reports/monthly/pdf/2026-01", headers=headers)
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")
    assert "could not save Monthly_Report_2026-01_" in caplog.text

    r = await client.get("/api/reports/compare/pdf/PAC_01/2026-01/2026-02", headers=headers)
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")
