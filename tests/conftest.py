"""
Pytest configuration and fixtures for testing.
"""
import os

# Settings are read at import time; keep the app away from Postgres and SMTP
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("EMAIL_ENABLED", "false")

from datetime import date, datetime
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.email_service import get_email_service
from app.database.session import Base, get_db
from main import app
from app.models import Member, MemberAdministration, MemberRelative, Menu, Package, Role, Team, TeamContract
from common_utils.auth.utils import hash_password, create_access_token


# Test database URL - using in-memory SQLite for tests
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "1234"


@pytest.fixture(scope="function")
def test_db():
    """
    Create a fresh test database for each test function.
    """
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(test_db):
    """
    Create a test client sharing the test database session.
    """
    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def email_service_mock(client):
    """Replace the SMTP-backed email service with a mock that reports success."""
    service = Mock()
    service.send_password_reset_email.return_value = True
    service.send_welcome_email.return_value = True
    app.dependency_overrides[get_email_service] = lambda: service
    return service


@pytest.fixture(scope="function")
def admin_role(test_db):
    """The bootstrap admin role; created first so it gets id 1."""
    role = Role(
        name="Admin",
        description="Administrator with full access",
        authorized_menu={"Teams": ["read", "write"], "Roles": ["read"]},
        status="active",
    )
    test_db.add(role)
    test_db.commit()
    test_db.refresh(role)
    return role


@pytest.fixture(scope="function")
def user_role(test_db, admin_role):
    role = Role(
        name="User",
        description="Regular user",
        authorized_menu=["Dashboard"],
        status="active",
    )
    test_db.add(role)
    test_db.commit()
    test_db.refresh(role)
    return role


@pytest.fixture(scope="function")
def sample_menu(test_db):
    menu = Menu(
        name="Teams",
        description="Team management",
        url_menu="/teams",
        icon_menu="team-icon",
        category="Main",
        ordering_number=1,
        parent_menu={},
        status="active",
    )
    test_db.add(menu)
    test_db.commit()
    test_db.refresh(menu)
    return menu


@pytest.fixture(scope="function")
def sample_package(test_db, sample_menu):
    package = Package(
        name="Basic Package",
        description="Access to basic features",
        image_url="/images/basic.png",
        selected_menu=[sample_menu.id],
        status="active",
    )
    test_db.add(package)
    test_db.commit()
    test_db.refresh(package)
    return package


@pytest.fixture(scope="function")
def sample_team(test_db, sample_package):
    team = Team(
        team_name="Development Team",
        company_name="Tech Solutions Ltd.",
        hq_address="123 Main Street, Cityville",
        manager_first_name="John",
        manager_last_name="Doe",
        manager_full_name="John Doe",
        manager_email="john.doe@techsolutions.com",
        manager_phone="1234567890",
        status="active",
    )
    test_db.add(team)
    test_db.flush()
    test_db.add(TeamContract(
        contract_number="DEV-2025-001",
        team_id=team.id,
        active_period_start=datetime(2025, 1, 1),
        active_period_end=datetime(2025, 12, 31),
        member_quota=15,
        package_id=sample_package.id,
        status="active",
    ))
    test_db.commit()
    test_db.refresh(team)
    return team


@pytest.fixture(scope="function")
def admin_user(test_db, admin_role, sample_team):
    """Active admin member with password 1234, an administration record and one relative."""
    member = Member(
        uid="100000001",
        email=ADMIN_EMAIL,
        password=hash_password(ADMIN_PASSWORD),
        phone_number="0987654321",
        first_name="Admin",
        last_name="User",
        full_name="Admin User",
        name="Admin User",
        employee_number="EMP001",
        joined_date=date(2023, 1, 1),
        team_id=sample_team.id,
        role_id=admin_role.id,
        status="active",
    )
    member.administration = MemberAdministration(tax_number="TAX-1234", card_number="CARD-5678")
    member.relatives = [
        MemberRelative(full_name="Jane Doe", relation_type="Spouse", phone_number="9876543210", is_emergency=True)
    ]
    test_db.add(member)
    test_db.commit()
    test_db.refresh(member)
    return member


@pytest.fixture(scope="function")
def admin_token(admin_user):
    return create_access_token(admin_user.id, admin_user.email)


@pytest.fixture(scope="function")
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def sample_team_data(sample_package):
    """Composite team payload: team fields, first contract and manager."""
    return {
        "teamName": "Marketing Team",
        "companyName": "Tech Solutions Ltd.",
        "hqAddress": "456 Market Street, Cityville",
        "managerFirstName": "Budi",
        "managerLastName": "Santoso",
        "managerEmail": "budi.santoso@techsolutions.com",
        "managerPhone": "081234567890",
        "contractNumber": "MKT-2025-001",
        "activePeriodStart": "2025-01-01T00:00:00",
        "activePeriodEnd": "2025-12-31T00:00:00",
        "memberQuota": 20,
        "packageId": sample_package.id,
    }


@pytest.fixture
def sample_member_data(user_role, sample_team):
    return {
        "email": "Siti.Rahma@Example.com",
        "password": "secret-pass",
        "firstName": "Siti",
        "lastName": "Rahma",
        "phoneNumber": "081111111111",
        "employeeNumber": "EMP002",
        "joinedDate": "2024-03-01",
        "gender": "Female",
        "teamId": sample_team.id,
        "roleId": user_role.id,
        "taxNumber": "TAX-0002",
        "identityNumber": "ID-0002",
        "relatives": [
            {"fullName": "Ahmad Rahman", "relationType": "Father", "phoneNumber": "0822", "isEmergency": True},
            {"fullName": "Dewi Rahma", "relationType": "Sister"},
        ],
    }
