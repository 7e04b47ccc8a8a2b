"""
Role Mutator

Administrative clearing of a user's roles.

Failures are reported through the boolean result only: these functions
log the cause and never raise to their callers.
"""

import logging
from typing import Dict, Iterable

from .config import USERS_COLLECTION
from .errors import AdminOperationFailed

logger = logging.getLogger(__name__)


async def remove_all_roles(db, user_id: str = None) -> bool:
    """
    Delete the entire roles field of a user's profile.

    Uses a field-level $unset so concurrent writes to other profile fields
    are preserved.

    Args:
        db: Database handle
        user_id: Id of the user whose roles are removed

    Returns:
        True if the roles field was removed (or already absent),
        False if the user does not exist or the store failed
    """
    if not user_id:
        return False

    try:
        result = await db[USERS_COLLECTION].update_one(
            {"id": user_id},
            {"$unset": {"roles": ""}}
        )
    except Exception as e:
        failure = AdminOperationFailed("remove_all_roles", user_id, cause=e)
        logger.error(f"Error deleting user's roles object: {failure}")
        return False

    if result.matched_count == 0:
        logger.warning(f"remove_all_roles: user {user_id} not found")
        return False

    logger.info(f"Removed roles for user {user_id}")
    return True


async def remove_all_roles_many(db, user_ids: Iterable[str]) -> Dict[str, bool]:
    """Clear roles for several users, one result per user id."""
    results = {}
    for user_id in user_ids:
        results[user_id] = await remove_all_roles(db, user_id)
    return results
