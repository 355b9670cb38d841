"""
Tests for /api/packages
"""
from fastapi import status


class TestPackageRouter:
    def test_create_package(self, client, auth_headers, sample_menu):
        payload = {
            "name": "Premium Package",
            "description": "Access to all features",
            "imageUrl": "/images/premium.png",
            "selectedMenu": [sample_menu.id],
        }

        response = client.post("/api/packages", json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["name"] == "Premium Package"
        assert data["selectedMenu"] == [sample_menu.id]

    def test_create_package_defaults_selected_menu(self, client, auth_headers, admin_user):
        response = client.post("/api/packages", json={"name": "Empty"}, headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["selectedMenu"] == []

    def test_list_packages_by_name(self, client, auth_headers, sample_package):
        response = client.get("/api/packages", params={"name": "basic"}, headers=auth_headers)

        data = response.json()["data"]
        assert data["totalData"] == 1
        assert data["items"][0]["id"] == sample_package.id

    def test_update_package(self, client, auth_headers, sample_package):
        response = client.put(
            f"/api/packages/{sample_package.id}",
            json={"selectedMenu": [], "description": "Nothing included"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["selectedMenu"] == []
        assert data["description"] == "Nothing included"

    def test_delete_package(self, client, auth_headers, sample_package):
        response = client.delete(f"/api/packages/{sample_package.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["status"] == "non-active"

        listing = client.get("/api/packages", headers=auth_headers).json()["data"]
        assert listing["totalData"] == 0

    def test_package_invalid_id(self, client, auth_headers):
        response = client.get("/api/packages/0", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
