"""
Wallet Service

Answers "get the wallet of username X as caller Y":

    resolve target -> access policy -> get-or-create wallet

The caller identity is resolved upstream (session dependency) and passed
in explicitly. A missing target is reported as NotFound before the policy
runs; a denied request is Unauthorized.
"""

import logging
from typing import Optional

from .config import WALLET_RETURNED_MESSAGE
from .errors import Unauthorized
from .identity import IdentityResolver
from .models import Identity, WalletResponse
from .policy import can_view
from .store import WalletStore

logger = logging.getLogger(__name__)


class WalletService:
    """Service for reading user wallets."""

    def __init__(self, db):
        self.db = db
        self.identities = IdentityResolver(db)
        self.store = WalletStore(db)

    async def resolve_target(self, caller: Identity, username: Optional[str]) -> Identity:
        """Target is the caller when no username is given."""
        if not username or username == caller.username:
            return caller
        return await self.identities.resolve_username(username)

    async def get_wallet(self, caller: Identity, username: Optional[str] = None) -> WalletResponse:
        """
        Get a wallet for API response.

        Raises:
            NotFound: target username does not exist
            Unauthorized: caller may not view the target's wallet
            StoreUnavailable: persistence failure
        """
        target = await self.resolve_target(caller, username)

        if not can_view(caller, target):
            logger.warning(f"User {caller.id} denied access to wallet of {target.id}")
            raise Unauthorized()

        wallet = await self.store.get_or_create(target.id)
        return WalletResponse.from_wallet(wallet, WALLET_RETURNED_MESSAGE)
