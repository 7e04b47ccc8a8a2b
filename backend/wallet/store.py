"""
Wallet Store

Owns the read / create-on-demand path for a user's wallet.

CRITICAL: Wallet creation is a single conditional upsert ($setOnInsert)
backed by a unique index on userId, so concurrent first reads can never
produce two wallets or two different seed balances.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from .config import SEED_CURRENCIES, WALLETS_COLLECTION
from .errors import StoreUnavailable
from .models import Wallet

logger = logging.getLogger(__name__)


class WalletStore:
    """Store for single-user wallet records."""

    def __init__(self, db):
        self.db = db

    @property
    def wallets(self):
        return self.db[WALLETS_COLLECTION]

    async def get_or_create(self, user_id: str) -> Wallet:
        """
        Get the user's wallet, creating it on first access.

        An existing wallet is returned unchanged; a new one is seeded with
        the starting dinero balance.
        """
        now = datetime.now(timezone.utc)

        wallet_doc = {
            "id": str(uuid.uuid4()),
            "userId": user_id,
            "currencies": dict(SEED_CURRENCIES),
            "createdAt": now.isoformat()
        }

        try:
            result = await self.wallets.update_one(
                {"userId": user_id},
                {"$setOnInsert": wallet_doc},
                upsert=True
            )
            if result.upserted_id is not None:
                logger.info(f"Created wallet for user {user_id}")
        except DuplicateKeyError:
            # Lost the insert race to a concurrent first read; the winner's
            # document is authoritative
            logger.info(f"Concurrent wallet creation for user {user_id}, using existing wallet")
        except PyMongoError as e:
            logger.error(f"Wallet upsert failed for user {user_id}: {e}")
            raise StoreUnavailable("wallet create", cause=e) from e

        wallet = await self.find(user_id)
        if wallet is None:
            raise StoreUnavailable("wallet read")
        return wallet

    async def find(self, user_id: str) -> Optional[Wallet]:
        """Read-only lookup. Returns None if the user has no wallet yet."""
        try:
            doc = await self.wallets.find_one({"userId": user_id}, {"_id": 0})
        except PyMongoError as e:
            logger.error(f"Wallet read failed for user {user_id}: {e}")
            raise StoreUnavailable("wallet read", cause=e) from e

        if not doc:
            return None
        return Wallet.model_validate(doc)
