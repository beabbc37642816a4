import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import get_database_manager
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def init_database():
    db = get_database_manager()
    logger.info(f"Initializing database at {db.database_path}...")

    await db.initialize()
    logger.info("Tables and indexes ready.")

    await db.close()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(init_database())
