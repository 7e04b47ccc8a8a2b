"""
Role-clear CLI

Removes the roles field from one or more user profiles.

Usage:
    python -m wallet.clear_roles USER_ID [USER_ID ...]

Exit status is 0 when every user was cleared, 1 otherwise.
"""

import os
import sys
import asyncio
import logging
from pathlib import Path
from typing import List

from motor.motor_asyncio import AsyncIOMotorClient

from wallet.roles import remove_all_roles_many

logger = logging.getLogger(__name__)


async def run_clear(user_ids: List[str]) -> int:
    """Clear roles for every user id. Returns the number of failures."""
    from dotenv import load_dotenv

    load_dotenv(Path(__file__).parent.parent / '.env')

    mongo_url = os.environ.get('MONGO_URL')
    db_name = os.environ.get('DB_NAME')

    if not mongo_url or not db_name:
        logger.error("Missing MONGO_URL or DB_NAME environment variables")
        return len(user_ids)

    client = AsyncIOMotorClient(mongo_url)
    try:
        results = await remove_all_roles_many(client[db_name], user_ids)
    finally:
        client.close()

    for user_id, success in results.items():
        logger.info(f"  [{'OK' if success else 'FAILED'}] {user_id}")

    return sum(1 for success in results.values() if not success)


def main():
    """Main entry point."""
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    parser = argparse.ArgumentParser(description="Remove all roles from user profiles")
    parser.add_argument('user_ids', nargs='+', help='Ids of the users to clear')
    args = parser.parse_args()

    failures = asyncio.run(run_clear(args.user_ids))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
