"""
Prepare the reviews collection: `python -m review_moderation.init_database`.

Creates the unique (userId, itemId) index. Fails if existing data already
holds duplicate reviews for a user and item; those must be cleaned up first.
"""

import asyncio
import logging

from review_moderation.core.environment import load_app_env
from review_moderation.core.logging import setup_logging
from review_moderation.database.db import close_db_client, get_db
from review_moderation.repo.review_repo import ensure_review_indexes

logger = logging.getLogger("review_moderation.init_database")


async def init_reviews() -> list[str]:
    try:
        return await ensure_review_indexes(get_db())
    finally:
        await close_db_client()


if __name__ == "__main__":
    setup_logging()
    load_app_env()
    names = asyncio.run(init_reviews())
    logger.info(f"Ensured {len(names)} indexes on reviews")
