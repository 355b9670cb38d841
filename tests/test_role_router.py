"""
Tests for /api/roles
"""
from fastapi import status

from app.models import Role


class TestRoleRouter:
    def test_create_role(self, client, auth_headers):
        payload = {
            "name": "Supervisor",
            "description": "Can review members",
            "authorizedMenu": {"Members": ["read", "verify"]},
        }

        response = client.post("/api/roles", json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["name"] == "Supervisor"
        assert data["authorizedMenu"] == {"Members": ["read", "verify"]}
        assert data["status"] == "active"

        fetched = client.get(f"/api/roles/{data['id']}", headers=auth_headers).json()["data"]
        assert fetched["authorizedMenu"] == {"Members": ["read", "verify"]}

    def test_create_role_requires_authorized_menu(self, client, auth_headers):
        response = client.post(
            "/api/roles", json={"name": "Broken", "description": "No grant"}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "INVALID_PARAMETERS"

    def test_create_role_rejects_null_authorized_menu(self, client, auth_headers, test_db):
        response = client.post(
            "/api/roles",
            json={"name": "Broken", "description": "Null grant", "authorizedMenu": None},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "INVALID_PARAMETERS"
        assert test_db.query(Role).filter(Role.name == "Broken").count() == 0

    def test_list_roles_filters(self, client, auth_headers, user_role):
        response = client.get("/api/roles", params={"name": "adm"}, headers=auth_headers)

        data = response.json()["data"]
        assert data["totalData"] == 1
        assert data["items"][0]["name"] == "Admin"

        response = client.get("/api/roles", params={"description": "regular"}, headers=auth_headers)
        assert [r["name"] for r in response.json()["data"]["items"]] == ["User"]

    def test_only_exactly_active_roles_are_visible(self, client, auth_headers, test_db):
        odd = Role(name="Legacy", description="Capitalised status", authorized_menu=[], status="Active")
        test_db.add(odd)
        test_db.commit()

        listing = client.get("/api/roles", headers=auth_headers).json()["data"]
        assert "Legacy" not in [r["name"] for r in listing["items"]]
        assert client.get(f"/api/roles/{odd.id}", headers=auth_headers).status_code == status.HTTP_404_NOT_FOUND

    def test_update_role(self, client, auth_headers, user_role):
        response = client.put(
            f"/api/roles/{user_role.id}",
            json={"authorizedMenu": ["Dashboard", "Teams"]},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["authorizedMenu"] == ["Dashboard", "Teams"]
        assert data["name"] == "User"

    def test_update_role_ignores_null_for_required_fields(self, client, auth_headers, user_role):
        response = client.put(
            f"/api/roles/{user_role.id}",
            json={"name": None, "authorizedMenu": None, "description": "Renamed grant"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["name"] == "User"
        assert data["authorizedMenu"] == ["Dashboard"]
        assert data["description"] == "Renamed grant"

    def test_delete_role_is_soft(self, client, auth_headers, user_role, test_db):
        response = client.delete(f"/api/roles/{user_role.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["status"] == "non-active"
        assert test_db.query(Role).filter(Role.id == user_role.id).count() == 1
        assert client.get(f"/api/roles/{user_role.id}", headers=auth_headers).status_code == status.HTTP_404_NOT_FOUND

    def test_role_not_found(self, client, auth_headers):
        response = client.put("/api/roles/777", json={"name": "x"}, headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Role not found"
