"""
Tests for the contracts nested under a team: /api/teams/{team_id}/contracts
"""
from datetime import datetime

from fastapi import status

from app.models import Team, TeamContract


def contracts_url(team_id, contract_id=None):
    base = f"/api/teams/{team_id}/contracts"
    return f"{base}/{contract_id}" if contract_id is not None else base


class TestContracts:
    def test_list_contracts(self, client, auth_headers, sample_team):
        response = client.get(contracts_url(sample_team.id), headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["totalData"] == 1
        assert data["items"][0]["contractNumber"] == "DEV-2025-001"

    def test_create_contract(self, client, auth_headers, sample_team, sample_package):
        payload = {
            "contractNumber": "DEV-2026-001",
            "activePeriodStart": "2026-01-01T00:00:00",
            "activePeriodEnd": "2026-12-31T00:00:00",
            "memberQuota": 30,
            "packageId": sample_package.id,
        }

        response = client.post(contracts_url(sample_team.id), json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["teamId"] == sample_team.id
        assert data["memberQuota"] == 30
        assert data["status"] == "active"

        listing = client.get(contracts_url(sample_team.id), headers=auth_headers).json()["data"]
        assert listing["totalData"] == 2

    def test_create_contract_duplicate_number(self, client, auth_headers, sample_team, sample_package):
        payload = {
            "contractNumber": "DEV-2025-001",
            "activePeriodEnd": "2026-12-31T00:00:00",
            "memberQuota": 5,
            "packageId": sample_package.id,
        }

        response = client.post(contracts_url(sample_team.id), json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"

    def test_create_contract_negative_quota(self, client, auth_headers, sample_team, sample_package):
        payload = {"activePeriodEnd": "2026-12-31T00:00:00", "memberQuota": -1, "packageId": sample_package.id}

        response = client.post(contracts_url(sample_team.id), json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_contract_of_unknown_team(self, client, auth_headers, admin_user):
        response = client.get(contracts_url(99999), headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_contract_of_other_team(self, client, auth_headers, sample_team, sample_package, test_db):
        other = Team(team_name="Other Team", status="active")
        test_db.add(other)
        test_db.flush()
        contract = TeamContract(
            team_id=other.id, active_period_end=datetime(2026, 1, 1), member_quota=1,
            package_id=sample_package.id, status="active",
        )
        test_db.add(contract)
        test_db.commit()

        response = client.get(contracts_url(sample_team.id, contract.id), headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_contract(self, client, auth_headers, sample_team):
        contract_id = sample_team.contracts[0].id

        response = client.put(
            contracts_url(sample_team.id, contract_id), json={"memberQuota": 40}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["memberQuota"] == 40
        assert data["contractNumber"] == "DEV-2025-001"

    def test_delete_contract_is_soft(self, client, auth_headers, sample_team, test_db):
        contract_id = sample_team.contracts[0].id

        response = client.delete(contracts_url(sample_team.id, contract_id), headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["status"] == "non-active"
        assert test_db.query(TeamContract).filter(TeamContract.id == contract_id).count() == 1

        listing = client.get(contracts_url(sample_team.id), headers=auth_headers).json()["data"]
        assert listing["totalData"] == 0
        team = client.get(f"/api/teams/{sample_team.id}", headers=auth_headers).json()["data"]
        assert team["contracts"] == []
