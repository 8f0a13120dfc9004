from __future__ import annotations

import re

import httpx
import pytest

from src.student_portal.student_portal.airtable.client import AirtableClient
from src.student_portal.student_portal.container import build_container
from src.student_portal.student_portal import main
from src.student_portal.student_portal.main import create_app

SECRET = "test-secret"
MASTER = "test-master"
SAM_PASSWORD = "ac-_L8Gz-aMeQEZ"  # derived from S010 with SECRET

TABLES = {
    "Students": [
        {"id": "recSam", "fields": {
            "Preferred Name": "Sam", "Name": "S010 - Sam Lee", "Current Course": ["recFE"],
            "% missed FE": 0.25, "% missed BE": 0.1}},
        {"id": "recJo", "fields": {"Preferred Name": "Jo", "Name": "Jo Park", "StudentID": "S011"}},
    ],
    "Courses": [
        {"id": "recFE", "fields": {"Name": "Frontend Jan 2026", "Start Date": "2026-01-12", "End Date": "2099-12-31"}},
        {"id": "recOld", "fields": {"Name": "Backend 2020", "Start Date": "2020-01-01", "End Date": "2020-06-01"}},
        {"id": "recNoStart", "fields": {"Name": "ITP Draft"}},
        {"id": "recTCF", "fields": {"Name": "TCF/ITP Fall 2025", "Start Date": "2025-09-01", "End Date": "2025-12-01"}},
    ],
    "Attendance": [
        {"id": "att3", "fields": {"Date": "2026-01-20", "PreferredNameText": ["Sam"],
                                  "Current Course (from Student)": ["recFE"], "Block A": "Absent", "Block B": "Present"}},
        {"id": "att2", "fields": {"Date": "2026-01-15", "PreferredNameText": ["Jo"],
                                  "Current Course (from Student)": ["recFE"], "Block A": "Tardy"}},
        {"id": "att1", "fields": {"Date": "2026-01-10", "PreferredNameText": ["Sam"],
                                  "Current Course (from Student)": ["recFE"], "Block A": "Absent"}},
        {"id": "att0", "fields": {"Date": "2025-10-01", "PreferredNameText": ["Jo"],
                                  "Current Course (from Student)": ["recTCF"], "Block A": "Absent"}},
    ],
}

_EQUALS = re.compile(r"^\{(?P<field>[^}]+)\}='(?P<value>.*)'$")


def _matches(record, formula):
    if not formula:
        return True
    m = _EQUALS.match(formula)
    if not m:
        return True
    value = record["fields"].get(m.group("field"))
    if isinstance(value, list):
        value = value[0] if value else None
    return value == m.group("value").replace("\\'", "'")


class FakeAirtable:
    def __init__(self):
        self.down = set()
        self.garbled = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        parts = request.url.path.split("/")[3:]
        table = parts[0]
        if table in self.down:
            return httpx.Response(503, text="maintenance")
        records = TABLES[table]
        if len(parts) == 2:
            if table in self.garbled:
                return httpx.Response(200, json={"id": parts[1], "fields": "garbage"})
            found = [r for r in records if r["id"] == parts[1]]
            return httpx.Response(200, json=found[0]) if found else httpx.Response(404, json={"error": "NOT_FOUND"})
        if table in self.garbled:
            return httpx.Response(200, json={"records": [{"id": "recBad", "fields": ["not", "a", "map"]}]})
        formula = request.url.params.get("filterByFormula")
        return httpx.Response(200, json={"records": [r for r in records if _matches(r, formula)]})


@pytest.fixture
def store():
    return FakeAirtable()


@pytest.fixture
def client(monkeypatch, store):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(
        airtable_config={"api_key": "k", "base_id": "appTEST", "max_retries": 0},
        portal_config={"pw_secret": SECRET, "master_password": MASTER, "course_start_date": "2026-01-12"},
        transport=httpx.MockTransport(store),
    )
    container.directory.refresh()
    app = create_app(container)
    return app.test_client()


def test_health(client):
    body = client.get("/health").get_json()

    assert body["status"] == "ok"
    assert body["directory"]["entries"] == 2
    assert set(body["directory"]) == {"entries", "lastRefresh", "lastError"}
    assert body["directory"]["lastError"] is None


def test_login_success(client):
    resp = client.post("/login", json={"preferredName": " sam ", "password": SAM_PASSWORD})

    assert resp.status_code == 200
    assert resp.get_json() == {
        "success": True,
        "staffOverride": False,
        "student": {"preferredName": "Sam", "studentId": "S010"},
    }


def test_login_failures_are_uniform(client):
    wrong = client.post("/login", json={"preferredName": "Sam", "password": "wrong"})
    unknown = client.post("/login", json={"preferredName": "unknown-alias", "password": SAM_PASSWORD})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json() == {"error": "Invalid credentials"}


def test_login_missing_fields(client):
    assert client.post("/login", json={"preferredName": "Sam"}).status_code == 400


def test_staff_override_login(client):
    body = client.post("/login", json={"preferredName": "jo", "password": MASTER}).get_json()

    assert body["staffOverride"] is True
    assert body["student"]["studentId"] == "S011"


def test_teacher_login(client):
    assert client.post("/teacher/login", json={"password": MASTER}).get_json() == {"success": True, "userType": "teacher"}
    assert client.post("/teacher/login", json={"password": "nope"}).status_code == 401
    assert client.post("/teacher/login", json={}).status_code == 400


def test_attendance_listing_applies_date_floor(client):
    body = client.get("/attendance/SAM").get_json()

    assert body["success"] is True
    assert body["records"] == [{
        "id": "att3",
        "date": "2026-01-20",
        "course": ["recFE"],
        "blockA": "Absent",
        "blockB": "Present",
        "blockC": None,
        "blockD": None,
    }]


def test_attendance_unknown_student(client):
    assert client.get("/attendance/ghost").status_code == 404


def test_attendance_store_failure_is_502(client, store):
    store.down.add("Attendance")

    resp = client.get("/attendance/Sam")

    assert resp.status_code == 502
    assert resp.get_json()["details"] == "maintenance"


def test_profile(client):
    body = client.get("/student/profile/sam").get_json()

    assert body["profile"] == {
        "preferredName": "Sam",
        "currentCourse": "Frontend Jan 2026",
        "percentMissedFE": 0.25,
        "percentMissedBE": 0.1,
        "percentMissedTCF": 0,
    }


def test_profile_course_outage_degrades(client, store):
    store.down.add("Courses")

    assert client.get("/student/profile/Sam").get_json()["profile"]["currentCourse"] is None


def test_active_classes(client):
    assert client.get("/teacher/classes").get_json() == {"success": True, "classes": ["Frontend Jan 2026"]}


def test_class_summary(client):
    body = client.get("/teacher/class/Frontend%20Jan%202026").get_json()

    assert body["students"] == [
        {"preferredName": "Jo", "absences": 0, "tardies": 1, "totalBlocks": 1, "percentMissed": 0},
        {"preferredName": "Sam", "absences": 1, "tardies": 0, "totalBlocks": 2, "percentMissed": 0.25},
    ]


def test_class_summary_errors(client):
    assert client.get("/teacher/class/Nope").status_code == 404
    assert client.get("/teacher/class/ITP%20Draft").status_code == 400


def test_on_demand_refresh(client, store):
    assert client.post("/admin/directory/refresh").status_code == 401

    ok = client.post("/admin/directory/refresh", headers={"X-Portal-Master": MASTER})
    assert ok.get_json() == {"success": True, "entries": 2}

    store.down.add("Students")
    failed = client.post("/admin/directory/refresh", headers={"X-Portal-Master": MASTER})
    assert failed.status_code == 502
    # previous directory still serves logins
    assert client.post("/login", json={"preferredName": "Sam", "password": SAM_PASSWORD}).status_code == 200


def test_class_name_may_contain_a_slash(client):
    resp = client.get("/teacher/class/TCF%2FITP%20Fall%202025")

    assert resp.status_code == 200
    assert resp.get_json()["students"] == [
        {"preferredName": "Jo", "absences": 1, "tardies": 0, "totalBlocks": 1, "percentMissed": 0},
    ]


def test_malformed_student_records_fail_refresh_with_502(client, store):
    store.garbled.add("Students")

    resp = client.post("/admin/directory/refresh", headers={"X-Portal-Master": MASTER})

    assert resp.status_code == 502
    assert client.get("/health").get_json()["directory"]["lastError"] is not None
    assert client.post("/login", json={"preferredName": "Sam", "password": SAM_PASSWORD}).status_code == 200


def test_malformed_course_record_degrades_profile(client, store):
    store.garbled.add("Courses")

    resp = client.get("/student/profile/Sam")

    assert resp.status_code == 200
    assert resp.get_json()["profile"]["currentCourse"] is None


def test_create_app_closes_store_client_at_exit(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    registered = []
    monkeypatch.setattr(main.atexit, "register", registered.append)

    main.create_app()

    assert any(isinstance(getattr(fn, "__self__", None), AirtableClient) and fn.__name__ == "close" for fn in registered)
