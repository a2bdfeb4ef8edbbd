"""
Tests for the read-only catalog API and its hot reload.

The module-level catalog is swapped per test with monkeypatch so results do
not depend on the bundled data file.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", "backend"))

import server
from catalog import Catalog
from catalog_loader import CatalogSourceError
from course import Course


@pytest.fixture
def small_catalog():
    catalog = Catalog()
    catalog.add_courses([
        Course("CSCI200", "Data Structures", ["CSCI100"]),
        Course("CSCI100", "Intro to CS"),
        Course("CSCI200", "Duplicate Data Structures"),
    ])
    return catalog


@pytest.fixture
def client(monkeypatch, small_catalog):
    monkeypatch.setattr(server, "_catalog", small_catalog, raising=False)
    monkeypatch.setattr(server, "_refresh_catalog_if_needed", lambda: None)
    server.app.config["TESTING"] = True
    with server.app.test_client() as c:
        yield c


# ── Endpoints ───────────────────────────────────────────────────────────────

class TestCatalogEndpoints:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok", "courses_loaded": 3}

    def test_api_health_alias(self, client):
        assert client.get("/api/health").status_code == 200

    def test_courses_sorted(self, client):
        data = client.get("/api/courses").get_json()
        numbers = [c["course_number"] for c in data["courses"]]
        assert numbers == ["CSCI100", "CSCI200", "CSCI200"]
        assert data["courses"][0]["prerequisites"] == []
        assert data["courses"][1]["prereq_count"] == 1

    def test_course_detail(self, client):
        resp = client.get("/api/courses/CSCI200")
        assert resp.status_code == 200
        body = resp.get_json()
        # First-inserted duplicate wins.
        assert body["course_name"] == "Data Structures"
        assert body["prerequisites"] == ["CSCI100"]

    def test_course_not_found(self, client):
        resp = client.get("/api/courses/CSCI999")
        assert resp.status_code == 404
        assert resp.get_json()["error"]["error_code"] == "COURSE_NOT_FOUND"

    def test_empty_catalog(self, client, monkeypatch):
        monkeypatch.setattr(server, "_catalog", Catalog())
        assert client.get("/api/courses").get_json() == {"courses": []}
        assert client.get("/api/courses/CSCI100").status_code == 404

    def test_unknown_api_route(self, client):
        resp = client.get("/api/nope")
        assert resp.status_code == 404
        assert "not found" in resp.get_json()["error"]

    def test_unknown_page_is_404_not_500(self, client):
        assert client.get("/nope").status_code == 404

    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"

    def test_unexpected_error_is_json_500(self, client, monkeypatch):
        def boom():
            raise RuntimeError("boom")

        monkeypatch.setattr(server._catalog, "to_frame", boom)
        resp = client.get("/api/courses")
        assert resp.status_code == 500
        assert resp.get_json()["error"]["error_code"] == "SERVER_ERROR"


# ── Hot reload ──────────────────────────────────────────────────────────────

def test_reload_skips_when_mtime_unchanged(monkeypatch):
    monkeypatch.setattr(server, "_catalog_mtime", 100.0, raising=False)
    monkeypatch.setattr(server, "_catalog_file_mtime", lambda _path: 100.0)

    called = {"count": 0}

    def fake_build(_path):
        called["count"] += 1
        return Catalog()

    monkeypatch.setattr(server, "_build_catalog", fake_build)

    changed = server._reload_catalog_if_changed()
    assert changed is False
    assert called["count"] == 0


def test_reload_swaps_catalog_when_mtime_advances(monkeypatch, small_catalog):
    old_catalog = Catalog()
    monkeypatch.setattr(server, "_catalog", old_catalog, raising=False)
    monkeypatch.setattr(server, "_catalog_mtime", 100.0, raising=False)
    monkeypatch.setattr(server, "_catalog_file_mtime", lambda _path: 200.0)
    monkeypatch.setattr(server, "_build_catalog", lambda _path: small_catalog)

    changed = server._reload_catalog_if_changed()
    assert changed is True
    assert server._catalog is small_catalog
    assert server._catalog_mtime == 200.0


def test_reload_failure_keeps_previous_catalog(monkeypatch):
    old_catalog = Catalog()
    monkeypatch.setattr(server, "_catalog", old_catalog, raising=False)
    monkeypatch.setattr(server, "_catalog_mtime", 100.0, raising=False)
    monkeypatch.setattr(server, "_catalog_file_mtime", lambda _path: 200.0)

    def boom(path):
        raise CatalogSourceError(path, OSError("gone"))

    monkeypatch.setattr(server, "_build_catalog", boom)

    changed = server._reload_catalog_if_changed()
    assert changed is False
    assert server._catalog is old_catalog
    assert server._catalog_mtime == 100.0


def test_reload_reads_real_file(monkeypatch, tmp_path):
    path = tmp_path / "courses.csv"
    path.write_text("B,b\nA,a\nbroken\n", encoding="utf-8")
    monkeypatch.setattr(server, "CATALOG_PATH", str(path))
    monkeypatch.setattr(server, "_catalog", Catalog(), raising=False)
    monkeypatch.setattr(server, "_catalog_mtime", None, raising=False)

    assert server._reload_catalog_if_changed(force=True) is True
    assert [c.course_number for c in server._catalog.sorted_courses()] == ["A", "B"]
