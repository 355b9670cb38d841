from fastapi import APIRouter, Depends, HTTPException, status, Body
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.email_service import EmailService, get_email_service
from app.core.logging_config import get_logger
from app.crud.member import member_crud
from app.database.session import get_db
from app.models import Member
from app.schemas.auth import ForgotPasswordRequest, LoginRequest, ProfileUpdate, ResetPasswordRequest
from app.schemas.base import to_payload
from app.schemas.member import MemberResponse
from app.utils.response_utils import (
    ResponseWrapper, handle_db_error, handle_http_error, not_found, unauthenticated
)
from common_utils.auth.token_validation import require_session
from common_utils.auth.utils import (
    AuthenticationError, RESET_TOKEN_TYPE,
    create_access_token, create_reset_token, hash_password, verify_password, verify_token,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"]
)


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=ResponseWrapper.error(
            message="Invalid email or password",
            error_code="UNAUTHENTICATED",
        ),
    )


def member_profile(member: Member) -> dict:
    return to_payload(MemberResponse, member)


def _session_member(db: Session, token_data: dict) -> Member:
    member = member_crud.get_visible(db, token_data.get("id"))
    if not member:
        logger.warning(f"Session member {token_data.get('id')} no longer exists")
        raise not_found("Member not found")
    return member


@router.post("/login")
def login(
    credentials: LoginRequest = Body(...),
    db: Session = Depends(get_db),
):
    """
    Authenticate a member by email and password.

    The token is returned both on its own and embedded in `authorized_url`,
    the link the client app at `client_url` opens to pick up the session.
    """
    logger.info(f"Login attempt for {credentials.email}")
    try:
        member = member_crud.get_active_by_email(db, email=credentials.email)
        if not member or not verify_password(credentials.password, member.password):
            logger.warning(f"Login failed for {credentials.email}")
            raise _invalid_credentials()

        token = create_access_token(member.id, member.email)
        client_url = (credentials.client_url or settings.DEFAULT_CLIENT_URL).strip().rstrip("/")
        for scheme in ("http://", "https://"):
            if client_url.startswith(scheme):
                client_url = client_url[len(scheme):]

        profile = member_profile(member)
        data = {
            "token": token,
            "id": profile["id"],
            "uid": profile["uid"],
            "email": profile["email"],
            "phoneNumber": profile["phoneNumber"],
            "firstName": profile["firstName"],
            "lastName": profile["lastName"],
            "employeeNumber": profile["employeeNumber"],
            "team": profile["team"],
            "role": profile["role"],
            "client_url": client_url,
            "authorized_url": f"http://{client_url}/{token}",
        }
        logger.info(f"Login successful for member {member.id}")
        return ResponseWrapper.success(data=data, message="Login successful")

    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.get("/me")
def get_current_user(
    db: Session = Depends(get_db),
    token_data: dict = Depends(require_session),
):
    """
    Get the current authenticated member's profile
    """
    try:
        member = _session_member(db, token_data)
        return ResponseWrapper.success(data=member_profile(member), message="User fetched successfully")
    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.put("/profile")
def update_profile(
    profile_in: ProfileUpdate,
    db: Session = Depends(get_db),
    token_data: dict = Depends(require_session),
):
    try:
        member = _session_member(db, token_data)
        member = member_crud.update(db, db_obj=member, obj_in=profile_in)
        logger.info(f"Profile updated for member {member.id}")
        return ResponseWrapper.updated(data=member_profile(member), message="Profile updated successfully")
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)


@router.post("/forgot-password")
def forgot_password(
    request_in: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    """
    Mail a password reset link valid for RESET_TOKEN_EXPIRE_DAYS days.
    """
    try:
        member = member_crud.get_active_by_email(db, email=request_in.email)
        if not member:
            logger.info(f"Password reset requested for unknown email {request_in.email}")
            raise not_found("Member not found")

        reset_token = create_reset_token(member.id, member.email)
        sent = email_service.send_password_reset_email(
            user_email=member.email,
            reset_token=reset_token,
            user_name=member.full_name or member.name or member.email,
        )
        if not sent:
            logger.error(f"Password reset email could not be delivered to member {member.id}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=ResponseWrapper.error(
                    message="Failed to send password reset email",
                    error_code="UPSTREAM_FAILURE",
                ),
            )

        return ResponseWrapper.success(message="Password reset email sent")

    except SQLAlchemyError as e:
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_http_error(e)


@router.post("/reset-password")
def reset_password(
    reset_in: ResetPasswordRequest,
    db: Session = Depends(get_db),
):
    try:
        try:
            claims = verify_token(reset_in.reset_token, expected_type=RESET_TOKEN_TYPE)
        except AuthenticationError as e:
            logger.info(f"Password reset rejected: {e}")
            raise unauthenticated()

        member = member_crud.get_visible(db, claims["id"])
        if not member:
            raise not_found("Member not found")

        member.password = hash_password(reset_in.new_password)
        db.add(member)
        db.commit()
        logger.info(f"Password reset for member {member.id}")
        return ResponseWrapper.success(message="Password has been reset successfully")

    except SQLAlchemyError as e:
        db.rollback()
        raise handle_db_error(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise handle_http_error(e)
