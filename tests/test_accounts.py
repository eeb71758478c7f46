# tests/test_accounts.py

from unittest import mock

import pytest
from django.db import DatabaseError

pytestmark = pytest.mark.django_db


def test_health_reports_database(api_client):
    response = api_client.get("/api/health/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_health_is_503_when_database_unreachable(api_client):
    with mock.patch("accounts.views.connection") as conn:
        conn.ensure_connection.side_effect = DatabaseError("connection refused")
        response = api_client.get("/api/health/")
    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "database": "unreachable"}


def test_me_requires_authentication(api_client):
    assert api_client.get("/api/me/").status_code in (401, 403)


def test_me_for_admin_has_no_assignments(admin_client):
    body = admin_client.get("/api/me/").json()
    assert body["username"] == "admin"
    assert body["role"] == "ADMIN"
    assert body["classAssignments"] == []


def test_me_lists_teacher_class_assignments(teacher_client, readonly_teacher_user, classroom):
    body = teacher_client.get("/api/me/").json()
    assert body["role"] == "TEACHER"
    assert body["classAssignments"] == [
        {"classroomId": classroom.id, "classroom": "Form 2 B (2025/2026)", "canEdit": True},
    ]
