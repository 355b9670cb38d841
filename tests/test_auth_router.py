"""
Tests for the /api/auth endpoints and the session guard.
"""
from datetime import timedelta

from fastapi import status

from app.models import Member
from common_utils.auth.utils import (
    RESET_TOKEN_TYPE, create_access_token, create_reset_token, verify_password, verify_token
)
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


class TestLogin:
    """Test cases for POST /api/auth/login"""

    def test_login_success(self, client, admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "clientUrl": "https://portal.example.com/"},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["id"] == admin_user.id
        assert data["email"] == ADMIN_EMAIL
        assert data["client_url"] == "portal.example.com"
        assert data["authorized_url"] == f"http://portal.example.com/{data['token']}"
        assert verify_token(data["token"])["id"] == admin_user.id

    def test_login_never_exposes_password_or_menu_grant(self, client, admin_user):
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        data = response.json()["data"]
        assert "password" not in data
        assert data["role"]["name"] == "Admin"
        assert "authorizedMenu" not in data["role"]
        assert "hqAddress" not in data["team"]
        assert "managerEmail" not in data["team"]

    def test_login_default_client_url(self, client, admin_user):
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        data = response.json()["data"]
        assert data["client_url"] == "localhost:3000"
        assert data["authorized_url"].startswith("http://localhost:3000/")

    def test_login_email_is_case_insensitive(self, client, admin_user):
        response = client.post("/api/auth/login", json={"email": "Admin@Example.com", "password": ADMIN_PASSWORD})

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, client, admin_user):
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid email or password"
        assert body["error"]["code"] == "UNAUTHENTICATED"

    def test_login_unknown_email(self, client, admin_user):
        response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "1234"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid email or password"

    def test_login_deleted_member_rejected(self, client, admin_user, test_db):
        admin_user.status = "non-active"
        test_db.commit()

        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_password(self, client, admin_user):
        response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["code"] == "INVALID_PARAMETERS"


class TestSessionGuard:
    """Every guarded route answers the same 401 whatever is wrong with the token"""

    def test_missing_header(self, client, admin_user):
        response = client.get("/api/teams")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "You are not authenticated"

    def test_malformed_header(self, client, admin_user, admin_token):
        response = client.get("/api/teams", headers={"Authorization": admin_token})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "You are not authenticated"

    def test_expired_token(self, client, admin_user):
        token = create_access_token(admin_user.id, admin_user.email, expires_delta=timedelta(seconds=-1))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "You are not authenticated"

    def test_garbage_token(self, client, admin_user):
        response = client.get("/api/roles", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    def test_reset_token_is_not_a_session(self, client, admin_user):
        token = create_reset_token(admin_user.id, admin_user.email)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestCurrentUser:
    def test_me(self, client, admin_user, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["email"] == ADMIN_EMAIL
        assert data["fullName"] == "Admin User"
        assert "password" not in data

    def test_update_profile(self, client, admin_user, auth_headers):
        response = client.put(
            "/api/auth/profile",
            json={"firstName": "Alice", "phoneNumber": "0800"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["firstName"] == "Alice"
        assert data["phoneNumber"] == "0800"
        assert data["lastName"] == "User"


class TestPasswordReset:
    def test_forgot_password_sends_reset_link(self, client, admin_user, email_service_mock):
        response = client.post("/api/auth/forgot-password", json={"email": ADMIN_EMAIL})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        email_service_mock.send_password_reset_email.assert_called_once()
        kwargs = email_service_mock.send_password_reset_email.call_args.kwargs
        assert kwargs["user_email"] == ADMIN_EMAIL
        claims = verify_token(kwargs["reset_token"], expected_type=RESET_TOKEN_TYPE)
        assert claims["id"] == admin_user.id

    def test_forgot_password_unknown_email(self, client, admin_user, email_service_mock):
        response = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        email_service_mock.send_password_reset_email.assert_not_called()

    def test_forgot_password_mail_failure(self, client, admin_user, email_service_mock):
        email_service_mock.send_password_reset_email.return_value = False

        response = client.post("/api/auth/forgot-password", json={"email": ADMIN_EMAIL})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"]["code"] == "UPSTREAM_FAILURE"

    def test_reset_password(self, client, admin_user, test_db):
        token = create_reset_token(admin_user.id, admin_user.email)

        response = client.post(
            "/api/auth/reset-password",
            json={"resetToken": token, "newPassword": "brand-new"},
        )

        assert response.status_code == status.HTTP_200_OK
        member = test_db.query(Member).filter(Member.id == admin_user.id).first()
        assert verify_password("brand-new", member.password)

        login = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "brand-new"})
        assert login.status_code == status.HTTP_200_OK

    def test_reset_password_rejects_access_token(self, client, admin_user, admin_token):
        response = client.post(
            "/api/auth/reset-password",
            json={"resetToken": admin_token, "newPassword": "brand-new"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_reset_password_expired_token(self, client, admin_user):
        token = create_reset_token(admin_user.id, admin_user.email, expires_delta=timedelta(seconds=-1))

        response = client.post(
            "/api/auth/reset-password",
            json={"resetToken": token, "newPassword": "brand-new"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
