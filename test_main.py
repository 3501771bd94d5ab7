"""
Physician DataBank Service — API Tests
=======================================
Run:  pytest test_main.py -v --cov=main --cov=databank --cov-report=term-missing
"""
import importlib
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from databank.core import config
from databank.core.config import settings
from databank.core.database import build_engine
from databank.core.dependencies import get_physician_repo, get_physician_service
from databank.core.exceptions import PersistenceError
from databank.repositories.physician_repository import PhysicianRepository
from databank.repositories.specialty_repository import SpecialtyRepository
from databank.middleware import normalize_path
from databank.schemas import MISSING_RECORD_MESSAGE, OUT_OF_DATE_MESSAGE
from databank.services.physician_service import PhysicianService
from main import app

client = TestClient(app)

JANE = {
    "last_name": "Smith",
    "first_name": "Jane",
    "email": "jane@x.com",
    "phone": "613-555-0100",
    "specialty": "Cardiology",
}


@pytest.fixture(autouse=True)
def service(sqlite_engine):
    repo = PhysicianRepository(sqlite_engine)
    svc = PhysicianService(repo, SpecialtyRepository(sqlite_engine))
    app.dependency_overrides[get_physician_service] = lambda: svc
    app.dependency_overrides[get_physician_repo] = lambda: repo
    yield svc
    app.dependency_overrides.clear()


def _create(**overrides):
    body = dict(JANE, **overrides)
    r = client.post("/api/v1/physicians", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def _put(physician, **changes):
    body = {k: physician[k] for k in (*JANE, "version")}
    body.update(changes)
    return client.put(f"/api/v1/physicians/{physician['id']}", json=body)


# ═══════════════════════════════════════════════════════════════════════════
# HEALTH & METRICS
# ═══════════════════════════════════════════════════════════════════════════
class TestHealth:
    def test_health_ok(self):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "service": "physician-databank"}

    def test_readiness_ok(self):
        r = client.get("/health/ready")
        assert r.status_code == 200
        assert r.json()["database"] == "connected"

    def test_readiness_fails_when_db_down(self):
        broken = MagicMock()
        broken.verify_connection.side_effect = Exception("boom")
        app.dependency_overrides[get_physician_repo] = lambda: broken
        r = client.get("/health/ready")
        assert r.status_code == 503

    def test_metrics_endpoint(self):
        _create()
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "physicians_created_total" in r.text

    def test_request_id_propagated(self):
        r = client.get("/api/v1/physicians", headers={"X-Request-ID": "my-req-42"})
        assert r.headers["X-Request-ID"] == "my-req-42"

    def test_request_id_generated(self):
        r = client.get("/api/v1/physicians")
        assert r.headers["X-Request-ID"]


# ═══════════════════════════════════════════════════════════════════════════
# POST /api/v1/physicians
# ═══════════════════════════════════════════════════════════════════════════
class TestCreatePhysician:
    def test_create_success(self):
        d = _create()
        assert d["id"] == 1
        assert d["version"] == 1
        assert d["created"] == d["updated"]
        assert d["last_name"] == "Smith"

    def test_strips_whitespace(self):
        d = _create(last_name="  Smith ", email=" jane@x.com")
        assert d["last_name"] == "Smith"
        assert d["email"] == "jane@x.com"

    @pytest.mark.parametrize("field", ["last_name", "first_name", "email", "phone", "specialty"])
    def test_missing_field_422(self, field):
        body = dict(JANE)
        del body[field]
        assert client.post("/api/v1/physicians", json=body).status_code == 422

    def test_blank_name_422(self):
        r = client.post("/api/v1/physicians", json=dict(JANE, first_name="   "))
        assert r.status_code == 422

    @pytest.mark.parametrize("email", ["jane", "jane@", "@x.com", "jane@x", "jane x@x.com"])
    def test_invalid_email_422(self, email):
        r = client.post("/api/v1/physicians", json=dict(JANE, email=email))
        assert r.status_code == 422

    @pytest.mark.parametrize("phone", ["123", "613-555-CALL", "+" + "1" * 30])
    def test_invalid_phone_422(self, phone):
        r = client.post("/api/v1/physicians", json=dict(JANE, phone=phone))
        assert r.status_code == 422

    @pytest.mark.parametrize("phone", ["613-555-0100", "+1 (613) 555.0100", "6135550100"])
    def test_accepted_phone_formats(self, phone):
        assert _create(phone=phone)["phone"] == phone

    def test_unknown_specialty_allowed_by_default(self):
        assert _create(specialty="Astrology")["specialty"] == "Astrology"

    def test_unknown_specialty_rejected_when_strict(self, sqlite_engine):
        strict = PhysicianService(PhysicianRepository(sqlite_engine),
                                  SpecialtyRepository(sqlite_engine),
                                  strict_specialties=True)
        app.dependency_overrides[get_physician_service] = lambda: strict
        r = client.post("/api/v1/physicians", json=dict(JANE, specialty="Astrology"))
        assert r.status_code == 422
        assert client.post("/api/v1/physicians", json=JANE).status_code == 201

    def test_database_error_500(self):
        broken = MagicMock()
        broken.create_physician.side_effect = PersistenceError("constraint violated")
        app.dependency_overrides[get_physician_service] = lambda: broken
        r = client.post("/api/v1/physicians", json=JANE)
        assert r.status_code == 500
        assert r.json()["detail"] == "Database error"
        assert r.json()["error"] == "database_error"


# ═══════════════════════════════════════════════════════════════════════════
# GET /api/v1/physicians
# ═══════════════════════════════════════════════════════════════════════════
class TestListPhysicians:
    def test_empty(self):
        r = client.get("/api/v1/physicians")
        assert r.status_code == 200
        assert r.json() == {"total": 0, "physicians": []}

    def test_returns_all_in_order(self):
        created = [_create(last_name=n) for n in ("Adams", "Brown", "Clark")]
        d = client.get("/api/v1/physicians").json()
        assert d["total"] == 3
        assert d["physicians"] == created

    def test_database_error_500(self):
        broken = MagicMock()
        broken.list_physicians.side_effect = PersistenceError("connection refused")
        app.dependency_overrides[get_physician_service] = lambda: broken
        r = client.get("/api/v1/physicians")
        assert r.status_code == 500
        assert r.json()["error"] == "database_error"


# ═══════════════════════════════════════════════════════════════════════════
# GET /api/v1/physicians/{id}
# ═══════════════════════════════════════════════════════════════════════════
class TestGetPhysician:
    def test_found(self):
        created = _create()
        r = client.get(f"/api/v1/physicians/{created['id']}")
        assert r.status_code == 200
        assert r.json() == created

    def test_not_found(self):
        r = client.get("/api/v1/physicians/999")
        assert r.status_code == 404
        assert r.json()["detail"] == MISSING_RECORD_MESSAGE

    @pytest.mark.parametrize("bad", ["abc", "0", "-3"])
    def test_invalid_id_422(self, bad):
        assert client.get(f"/api/v1/physicians/{bad}").status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# PUT /api/v1/physicians/{id}  — OPTIMISTIC LOCKING
# ═══════════════════════════════════════════════════════════════════════════
class TestUpdatePhysician:
    def test_update_success(self):
        created = _create()
        r = _put(created, phone="613-555-0199")
        assert r.status_code == 200
        d = r.json()
        assert d["version"] == 2
        assert d["phone"] == "613-555-0199"
        assert d["created"] == created["created"]
        assert d["updated"] > created["updated"]

    def test_stale_version_conflict(self):
        physician_a = _create()
        caller_1 = client.get(f"/api/v1/physicians/{physician_a['id']}").json()
        caller_2 = client.get(f"/api/v1/physicians/{physician_a['id']}").json()

        assert _put(caller_1, phone="613-555-0199").json()["version"] == 2

        r = _put(caller_2, email="jane.smith@x.com")
        assert r.status_code == 409
        assert r.json()["detail"] == OUT_OF_DATE_MESSAGE

        stored = client.get(f"/api/v1/physicians/{physician_a['id']}").json()
        assert stored["phone"] == "613-555-0199"
        assert stored["email"] == "jane@x.com"
        assert stored["version"] == 2

    def test_deleted_record_404(self):
        created = _create()
        client.delete(f"/api/v1/physicians/{created['id']}")
        r = _put(created, phone="613-555-0199")
        assert r.status_code == 404
        assert r.json()["detail"] == MISSING_RECORD_MESSAGE

    def test_deleted_record_404_beats_unknown_specialty_when_strict(self, sqlite_engine):
        strict = PhysicianService(PhysicianRepository(sqlite_engine),
                                  SpecialtyRepository(sqlite_engine),
                                  strict_specialties=True)
        app.dependency_overrides[get_physician_service] = lambda: strict
        created = _create()
        client.delete(f"/api/v1/physicians/{created['id']}")
        r = _put(created, specialty="Astrology")
        assert r.status_code == 404
        assert r.json()["detail"] == MISSING_RECORD_MESSAGE

    def test_unknown_specialty_422_when_strict(self, sqlite_engine):
        strict = PhysicianService(PhysicianRepository(sqlite_engine),
                                  SpecialtyRepository(sqlite_engine),
                                  strict_specialties=True)
        app.dependency_overrides[get_physician_service] = lambda: strict
        created = _create()
        assert _put(created, specialty="Astrology").status_code == 422
        assert _put(created, specialty="Neurology").json()["version"] == 2

    def test_missing_version_422(self):
        created = _create()
        r = client.put(f"/api/v1/physicians/{created['id']}", json=JANE)
        assert r.status_code == 422

    def test_partial_body_422(self):
        created = _create()
        r = client.put(f"/api/v1/physicians/{created['id']}",
                       json={"phone": "613-555-0199", "version": 1})
        assert r.status_code == 422

    def test_invalid_email_422_leaves_record(self):
        created = _create()
        assert _put(created, email="nope").status_code == 422
        assert client.get(f"/api/v1/physicians/{created['id']}").json()["version"] == 1

    def test_database_error_500(self):
        broken = MagicMock()
        broken.update_physician.side_effect = PersistenceError("statement timeout")
        app.dependency_overrides[get_physician_service] = lambda: broken
        r = client.put("/api/v1/physicians/1", json=dict(JANE, version=1))
        assert r.status_code == 500
        assert r.json() == {"error": "database_error", "detail": "Database error"}


# ═══════════════════════════════════════════════════════════════════════════
# DELETE /api/v1/physicians/{id}
# ═══════════════════════════════════════════════════════════════════════════
class TestDeletePhysician:
    def test_delete_existing(self):
        created = _create()
        r = client.delete(f"/api/v1/physicians/{created['id']}")
        assert r.status_code == 204
        assert client.get(f"/api/v1/physicians/{created['id']}").status_code == 404

    def test_delete_missing_is_noop(self):
        kept = _create()
        r = client.delete("/api/v1/physicians/999")
        assert r.status_code == 204
        assert client.get("/api/v1/physicians").json()["physicians"] == [kept]

    def test_service_reports_whether_anything_was_removed(self, service):
        created = _create()
        assert service.delete_physician(created["id"]) is True
        assert service.delete_physician(created["id"]) is False


# ═══════════════════════════════════════════════════════════════════════════
# GET /api/v1/specialties
# ═══════════════════════════════════════════════════════════════════════════
class TestSpecialties:
    def test_list(self):
        r = client.get("/api/v1/specialties")
        assert r.status_code == 200
        assert r.json() == {"total": 3, "specialties": ["Cardiology", "Neurology", "Pediatrics"]}


# ═══════════════════════════════════════════════════════════════════════════
# CONFIG, ENGINE & MIDDLEWARE
# ═══════════════════════════════════════════════════════════════════════════
class TestPlumbing:
    def test_service_name_from_env(self, monkeypatch):
        monkeypatch.setenv("SERVICE_NAME", "databank-east")
        try:
            assert importlib.reload(config).settings.SERVICE_NAME == "databank-east"
        finally:
            monkeypatch.delenv("SERVICE_NAME")
            importlib.reload(config)
        assert config.settings.SERVICE_NAME == "physician-databank"

    def test_file_sqlite_engine_honours_pool_timeout(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path / 'databank.db'}")
        try:
            assert engine.pool.timeout() == settings.POOL_TIMEOUT
        finally:
            engine.dispose()

    def test_memory_sqlite_engine(self):
        engine = build_engine("sqlite://")
        try:
            with engine.connect() as conn:
                assert conn.exec_driver_sql("SELECT 1").scalar() == 1
        finally:
            engine.dispose()

    @pytest.mark.parametrize("path,expected", [
        ("/api/v1/physicians", "/api/v1/physicians"),
        ("/api/v1/physicians/42", "/api/v1/physicians/{param}"),
        ("/api/v1/physicians/42/", "/api/v1/physicians/{param}"),
        ("/api/v1/specialties", "/api/v1/specialties"),
        ("/wp-admin/login.php", "/{param}/{param}"),
        ("/", "/"),
    ])
    def test_normalize_path(self, path, expected):
        assert normalize_path(path) == expected
