"""
Authentication utilities
"""
from fastapi import Cookie, Depends
import jwt
from datetime import datetime, timezone, timedelta
from typing import Optional

from database import get_db
from wallet.config import COOKIE_NAME, JWT_SECRET, JWT_ALGORITHM, TOKEN_TTL_DAYS, ERROR_MESSAGES
from wallet.errors import NotFound, Unauthorized
from wallet.identity import IdentityResolver
from wallet.models import Identity, Role


def create_token(user_id: str) -> str:
    """Issue a session token for tests and local development; production tokens come from the auth service"""
    payload = {
        "userId": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(days=TOKEN_TTL_DAYS)
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Verify a session token and return its claims"""
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized(ERROR_MESSAGES["UNAUTHENTICATED"])
    except jwt.InvalidTokenError:
        raise Unauthorized(ERROR_MESSAGES["UNAUTHENTICATED"])


async def get_current_user(
    session: Optional[str] = Cookie(None, alias=COOKIE_NAME),
    db=Depends(get_db)
) -> Identity:
    """Verify the session cookie and return the caller's identity"""
    if not session:
        raise Unauthorized(ERROR_MESSAGES["UNAUTHENTICATED"])

    claims = decode_token(session)

    try:
        return await IdentityResolver(db).resolve_claims(claims)
    except NotFound:
        # A valid token for a deleted or unknown user is an auth failure
        raise Unauthorized(ERROR_MESSAGES["UNAUTHENTICATED"])


async def get_super_user(user: Identity = Depends(get_current_user)) -> Identity:
    """Check if user is a super user"""
    if not user.has_role(Role.SUPER_USER):
        raise Unauthorized()
    return user
