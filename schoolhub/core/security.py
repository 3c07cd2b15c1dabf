# schoolhub/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from schoolhub.core.config import settings
from schoolhub.core.context import RequestContext
from schoolhub.db.session import get_db
from schoolhub.models.user import User

# Only used by the OpenAPI docs
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def create_access_token(subject: dict[str, Any], expires_minutes: int | None = None) -> str:
    """
    Issue a JWT with 'exp' and 'iat'.
    - 'sub' is normalized to str.
    - 'iat' is epoch seconds (int).
    """
    if expires_minutes is None:
        expires_minutes = settings.JWT_EXPIRE_MINUTES

    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes)

    claims = dict(subject)
    for key in ("sub", "school_id"):
        if key in claims and not isinstance(claims[key], str):
            claims[key] = str(claims[key])

    to_encode = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": exp,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def verify_password(password: str, password_hash: str | None) -> bool:
    """False for accounts without a password as well as for a wrong one."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # malformed stored hash, or a password over bcrypt's 72 byte limit
        return False


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode requiring 'exp' and 'iat' and checking expiry.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"], "verify_exp": True},
            leeway=5,  # clock skew
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Active user behind the bearer token.
    """
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Token has no subject")

    try:
        user_id = UUID(str(sub))
    except ValueError:
        raise HTTPException(status_code=401, detail="Token subject is not a valid id")

    user = db.query(User).filter(User.id == user_id, User.status == "active").first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return user


def get_request_context(user: User = Depends(get_current_user)) -> RequestContext:
    # The school always comes from the stored user, never from the client
    return RequestContext(user_id=user.id, school_id=user.school_id, role=user.role)
