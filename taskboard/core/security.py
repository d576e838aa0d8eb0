from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Request
from werkzeug.security import check_password_hash, generate_password_hash

from taskboard.core.config import JWT_ALGORITHM, JWT_EXPIRES_MINUTES, JWT_SECRET
from taskboard.core.errors import AuthenticationError


@dataclass(frozen=True)
class CurrentUser:
    id: int
    username: str


# --- Password hashing --- #


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, stored: str) -> bool:
    return check_password_hash(stored, password)


# --- Tokens --- #


def create_access_token(user_id: int, username: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
        "exp": now + timedelta(minutes=JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def _get_bearer_token(request: Request) -> str:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise AuthenticationError("No token, authorization denied")
    token = auth.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("No token, authorization denied")
    return token


def get_current_user(request: Request) -> CurrentUser:
    """Resolve the caller from the bearer token without touching the database."""
    user = getattr(request.state, "user", None)
    if user is not None:
        return user

    token = _get_bearer_token(request)
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return CurrentUser(id=int(claims["sub"]), username=claims.get("username", ""))
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        raise AuthenticationError(f"Token is not valid: {e}")
