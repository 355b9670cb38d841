"""
Seeding produces a usable database and can be re-run safely.
"""
from fastapi import status

from app.models import Member, Menu, Package, Role, Team, TeamContract
from app.seed.seed_data import DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD, seed_all


class TestSeedData:
    def test_seed_all(self, test_db):
        seed_all(test_db)

        admin_role = test_db.query(Role).filter(Role.name == "Admin").first()
        assert admin_role.id == 1
        assert test_db.query(Menu).count() == 4
        assert test_db.query(Package).count() == 2
        assert test_db.query(Team).filter(Team.team_name == "Development Team").count() == 1
        assert test_db.query(TeamContract).filter(TeamContract.contract_number == "DEV-2025-001").count() == 1

        admin = test_db.query(Member).filter(Member.email == DEFAULT_ADMIN_EMAIL).first()
        assert admin.role_id == admin_role.id
        assert admin.administration.tax_number == "TAX-1234"
        assert [r.full_name for r in admin.relatives] == ["Jane Doe"]

    def test_seed_is_idempotent(self, test_db):
        seed_all(test_db)
        seed_all(test_db)

        assert test_db.query(Role).count() == 2
        assert test_db.query(Menu).count() == 4
        assert test_db.query(Member).filter(Member.email == DEFAULT_ADMIN_EMAIL).count() == 1

    def test_seeded_admin_can_log_in(self, client, test_db):
        seed_all(test_db)

        response = client.post(
            "/api/auth/login",
            json={"email": DEFAULT_ADMIN_EMAIL, "password": DEFAULT_ADMIN_PASSWORD},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["role"]["name"] == "Admin"
