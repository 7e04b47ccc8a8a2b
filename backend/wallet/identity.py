"""
Identity Resolver

Maps verified session claims, user ids and usernames to an Identity.
Read-only: never writes to the users collection.
"""

import logging
from typing import Any, Dict, Mapping

from pymongo.errors import PyMongoError

from .config import USERS_COLLECTION
from .errors import NotFound, StoreUnavailable
from .models import Identity

logger = logging.getLogger(__name__)

# Only the fields the resolver needs
_IDENTITY_PROJECTION = {"_id": 0, "id": 1, "username": 1, "roles": 1}


class IdentityResolver:
    """Resolves users from the users collection."""

    def __init__(self, db):
        self.db = db

    @property
    def users(self):
        return self.db[USERS_COLLECTION]

    async def resolve_claims(self, claims: Mapping[str, Any]) -> Identity:
        """
        Resolve decoded token claims to an identity.

        Claims carry `userId` (preferred) or `username`. Anything else is
        treated as an unknown user.
        """
        user_id = claims.get("userId") if claims else None
        if isinstance(user_id, str) and user_id:
            return await self.resolve_user_id(user_id)

        username = claims.get("username") if claims else None
        if isinstance(username, str) and username:
            return await self.resolve_username(username)

        raise NotFound(lookup="claims")

    async def resolve_user_id(self, user_id: str) -> Identity:
        return await self._resolve({"id": user_id}, f"id={user_id}")

    async def resolve_username(self, username: str) -> Identity:
        """Exact-match lookup; usernames are stored as given at signup."""
        return await self._resolve({"username": username}, f"username={username}")

    async def _resolve(self, query: Dict[str, Any], lookup: str) -> Identity:
        try:
            doc = await self.users.find_one(query, _IDENTITY_PROJECTION)
        except PyMongoError as e:
            logger.error(f"User lookup failed ({lookup}): {e}")
            raise StoreUnavailable("user lookup", cause=e) from e

        if not doc:
            logger.info(f"User not found ({lookup})")
            raise NotFound(lookup=lookup)

        return Identity.from_document(doc)
