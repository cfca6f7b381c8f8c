"""Tests for the admin dashboard, booking overview and user roles."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def _date_str(offset: int) -> str:
    """Return an ISO date string relative to today."""
    return (date.today() + timedelta(days=offset)).isoformat()


async def _book(client: AsyncClient, property_id: str, check_in: int, check_out: int) -> dict:
    response = await client.post(
        "/api/v1/bookings",
        json={
            "property_id": property_id,
            "guest_name": "Yaw Asante",
            "guest_email": "yaw@example.com",
            "guest_phone": "0244123456",
            "check_in": _date_str(check_in),
            "check_out": _date_str(check_out),
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["booking"]


class TestAdminAccess:
    @pytest.mark.parametrize("path", ["/api/v1/admin/stats", "/api/v1/admin/bookings", "/api/v1/admin/users"])
    async def test_guest_forbidden(self, client: AsyncClient, auth_headers: dict, path: str) -> None:
        response = await client.get(path, headers=auth_headers)
        assert response.status_code == 403

    async def test_anonymous_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/admin/stats")
        assert response.status_code in (401, 403)


class TestDashboardStats:
    async def test_empty_dashboard(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.get("/api/v1/admin/stats", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total_properties"] == 0
        assert data["total_bookings"] == 0
        assert float(data["total_revenue"]) == 0.0
        assert data["total_users"] == 1
        assert data["pending_users"] == 0
        assert data["window_days"] == 30
        assert data["property_stats"] == []

    async def test_ranked_by_revenue(
        self, client: AsyncClient, admin_headers: dict, test_property: dict
    ) -> None:
        quiet = await client.post(
            "/api/v1/properties",
            json={"title": "Quiet Studio", "location": "Ho", "price_per_night": 40},
            headers=admin_headers,
        )
        assert quiet.status_code == 201

        await _book(client, test_property["id"], 10, 13)

        response = await client.get("/api/v1/admin/stats", headers=admin_headers)
        data = response.json()
        assert data["total_properties"] == 2
        assert data["total_bookings"] == 1
        assert data["recent_bookings"] == 1
        assert float(data["total_revenue"]) == 450.0

        top, bottom = data["property_stats"]
        assert top["property_id"] == test_property["id"]
        assert top["bookings_count"] == 1
        assert float(top["total_revenue"]) == 450.0
        assert float(top["occupancy_rate"]) == 3.33

        assert bottom["title"] == "Quiet Studio"
        assert bottom["bookings_count"] == 0
        assert float(bottom["occupancy_rate"]) == 0.0


class TestAllBookings:
    async def test_lists_every_booking(
        self, client: AsyncClient, admin_headers: dict, auth_headers: dict, test_property: dict
    ) -> None:
        await _book(client, test_property["id"], 5, 7)
        booking = await _book(client, test_property["id"], 8, 9)
        await client.put(
            f"/api/v1/bookings/{booking['id']}/status",
            json={"status": "confirmed"},
            headers=admin_headers,
        )

        everything = (await client.get("/api/v1/admin/bookings", headers=admin_headers)).json()
        assert everything["total"] == 2

        confirmed = (
            await client.get("/api/v1/admin/bookings", params={"status": "confirmed"}, headers=admin_headers)
        ).json()
        assert [b["id"] for b in confirmed["items"]] == [booking["id"]]

        by_property = (
            await client.get(
                "/api/v1/admin/bookings",
                params={"property_id": test_property["id"]},
                headers=admin_headers,
            )
        ).json()
        assert by_property["total"] == 2


class TestUserRoles:
    async def test_list_users(self, client: AsyncClient, admin_headers: dict, test_user) -> None:
        response = await client.get("/api/v1/admin/users", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["total"] == 2

    async def test_promote_guest(
        self, client: AsyncClient, admin_headers: dict, test_user, auth_headers: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/admin/users/{test_user.id}/role",
            json={"role": "admin"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

        stats = await client.get("/api/v1/admin/stats", headers=auth_headers)
        assert stats.status_code == 200

    async def test_cannot_demote_self(self, client: AsyncClient, admin_headers: dict, admin_user) -> None:
        response = await client.put(
            f"/api/v1/admin/users/{admin_user.id}/role",
            json={"role": "guest"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    async def test_unknown_user(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.put(
            "/api/v1/admin/users/00000000-0000-0000-0000-000000000000/role",
            json={"role": "admin"},
            headers=admin_headers,
        )
        assert response.status_code == 404

    async def test_invalid_role(self, client: AsyncClient, admin_headers: dict, test_user) -> None:
        response = await client.put(
            f"/api/v1/admin/users/{test_user.id}/role",
            json={"role": "owner"},
            headers=admin_headers,
        )
        assert response.status_code == 422


class TestAccountApproval:
    async def _pending_admin(self, client: AsyncClient) -> tuple[str, dict]:
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "email": "applicant@staypoint.example",
                "password": "longenough",
                "name": "Applicant",
                "role": "admin",
            },
        )
        data = response.json()
        return data["user"]["id"], {"Authorization": f"Bearer {data['tokens']['access_token']}"}

    async def test_pending_count_and_filter(self, client: AsyncClient, admin_headers: dict) -> None:
        user_id, _ = await self._pending_admin(client)

        stats = (await client.get("/api/v1/admin/stats", headers=admin_headers)).json()
        assert stats["pending_users"] == 1

        pending = (
            await client.get("/api/v1/admin/users", params={"status": "pending"}, headers=admin_headers)
        ).json()
        assert [u["id"] for u in pending["items"]] == [user_id]

    async def test_approve_grants_admin_access(self, client: AsyncClient, admin_headers: dict) -> None:
        user_id, applicant_headers = await self._pending_admin(client)

        response = await client.put(
            f"/api/v1/admin/users/{user_id}/status",
            json={"status": "approved"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        stats = await client.get("/api/v1/admin/stats", headers=applicant_headers)
        assert stats.status_code == 200
        assert stats.json()["pending_users"] == 0

    async def test_reject_keeps_admin_access_closed(self, client: AsyncClient, admin_headers: dict) -> None:
        user_id, applicant_headers = await self._pending_admin(client)

        response = await client.put(
            f"/api/v1/admin/users/{user_id}/status",
            json={"status": "rejected"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "rejected"

        stats = await client.get("/api/v1/admin/stats", headers=applicant_headers)
        assert stats.status_code == 403

    async def test_guest_cannot_approve(
        self, client: AsyncClient, auth_headers: dict, admin_user
    ) -> None:
        response = await client.put(
            f"/api/v1/admin/users/{admin_user.id}/status",
            json={"status": "rejected"},
            headers=auth_headers,
        )
        assert response.status_code == 403

    async def test_cannot_reject_self(self, client: AsyncClient, admin_headers: dict, admin_user) -> None:
        response = await client.put(
            f"/api/v1/admin/users/{admin_user.id}/status",
            json={"status": "rejected"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    async def test_invalid_status(self, client: AsyncClient, admin_headers: dict, test_user) -> None:
        response = await client.put(
            f"/api/v1/admin/users/{test_user.id}/status",
            json={"status": "banned"},
            headers=admin_headers,
        )
        assert response.status_code == 422
