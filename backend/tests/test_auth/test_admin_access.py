"""Unit tests for admin detection."""

from types import SimpleNamespace

import pytest

from staypoint.auth.dependencies import is_admin
from staypoint.config import settings


def _user(email: str, role: str = "guest", status: str = "approved") -> SimpleNamespace:
    return SimpleNamespace(email=email, role=role, status=status)


def test_admin_role():
    assert is_admin(_user("someone@test.com", role="admin"))


def test_guest_role():
    assert not is_admin(_user("someone@test.com"))


@pytest.mark.parametrize("status", ["pending", "rejected"])
def test_unapproved_admin(status):
    assert not is_admin(_user("someone@test.com", role="admin", status=status))


def test_configured_admin_email(monkeypatch):
    monkeypatch.setattr(settings, "admin_emails", ["owner@staypoint.example"])
    assert is_admin(_user("Owner@StayPoint.example"))
    assert is_admin(_user("owner@staypoint.example", status="pending"))
    assert not is_admin(_user("other@staypoint.example"))
