from datetime import datetime, timedelta, timezone
from typing import Optional, Dict
import jwt
from passlib.context import CryptContext
from app.config import settings

# Configuration - use centralized settings
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
RESET_TOKEN_EXPIRE_DAYS = settings.RESET_TOKEN_EXPIRE_DAYS

ACCESS_TOKEN_TYPE = "access"
RESET_TOKEN_TYPE = "password_reset"

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


class AuthenticationError(Exception):
    """Token could not be trusted. The reason is kept for logs, never for clients."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Stored value is not a bcrypt hash
        return False


def _encode(member_id: int, email: str, token_type: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "id": member_id,
        "email": email,
        "token_type": token_type,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(
    member_id: int,
    email: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    return _encode(
        member_id,
        email,
        ACCESS_TOKEN_TYPE,
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_reset_token(
    member_id: int,
    email: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    return _encode(
        member_id,
        email,
        RESET_TOKEN_TYPE,
        expires_delta or timedelta(days=RESET_TOKEN_EXPIRE_DAYS),
    )


def verify_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Dict:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {e}")

    if payload.get("token_type") != expected_type:
        raise AuthenticationError(f"Expected {expected_type} token, got {payload.get('token_type')}")
    if not isinstance(payload.get("id"), int):
        raise AuthenticationError("Token carries no member id")
    return payload
