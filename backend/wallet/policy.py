"""
Access Policy

The single predicate every wallet-exposing entry point goes through before
touching wallet data.
"""

import logging

from .models import Role, parse_roles

logger = logging.getLogger(__name__)


def can_view(caller, target) -> bool:
    """
    Decide whether `caller` may view `target`'s wallet.

    Allowed for self-access or when the caller holds super_user.
    Never raises: a malformed identity is a deny.
    """
    try:
        caller_id = caller.id
        target_id = target.id
        if isinstance(caller_id, str) and caller_id and caller_id == target_id:
            return True
        return Role.SUPER_USER in parse_roles(caller.roles)
    except Exception as e:
        logger.debug(f"Malformed identity in access check: {e}")
        return False
