"""
Wallet indexes

The unique indexes the wallet invariants rest on. Applied by the server on
startup and by this module's CLI, always under the same names, so either
order of the two is a no-op on an already initialised database.

Usage:
    python -m wallet.db_init
    python -m wallet.db_init --dry-run
"""

import os
import sys
import asyncio
import logging
from pathlib import Path
from typing import List

from motor.motor_asyncio import AsyncIOMotorClient

from wallet.config import USERS_COLLECTION, WALLETS_COLLECTION

logger = logging.getLogger(__name__)

# (collection, keys, name)
REQUIRED_INDEXES = [
    (USERS_COLLECTION, [("id", 1)], "idx_user_id_unique"),
    (USERS_COLLECTION, [("username", 1)], "idx_username_unique"),
    # One wallet per user, also under concurrent first reads
    (WALLETS_COLLECTION, [("userId", 1)], "idx_wallet_user_id_unique"),
]


async def ensure_indexes(db, dry_run: bool = False) -> List[str]:
    """Create every required unique index. Returns the names handled."""
    names = []
    for collection_name, keys, name in REQUIRED_INDEXES:
        if dry_run:
            logger.info(f"[DRY-RUN] {collection_name}.{name} {keys}")
        else:
            # Same name, keys and options as an existing index is a no-op
            await db[collection_name].create_index(keys, unique=True, name=name)
            logger.info(f"[OK] {collection_name}.{name}")
        names.append(name)
    return names


async def run_init(dry_run: bool = False) -> None:
    from dotenv import load_dotenv

    load_dotenv(Path(__file__).parent.parent / '.env')

    mongo_url = os.environ.get('MONGO_URL')
    db_name = os.environ.get('DB_NAME')
    if not mongo_url or not db_name:
        logger.error("Missing MONGO_URL or DB_NAME environment variables")
        sys.exit(1)

    logger.info(f"Database: {db_name}")
    client = AsyncIOMotorClient(mongo_url)
    try:
        await ensure_indexes(client[db_name], dry_run)
    finally:
        client.close()


def main():
    """Main entry point."""
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    parser = argparse.ArgumentParser(description="Create the wallet database indexes")
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the indexes without creating them'
    )
    args = parser.parse_args()

    asyncio.run(run_init(dry_run=args.dry_run))


if __name__ == "__main__":
    main()
