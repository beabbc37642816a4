"""
Script to import station catalogs and streamflow data for all configured regions
"""

import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import get_database_manager
from core.exceptions import StoreError
from core.logging import setup_logging
from ingestion.runner import StationImporter
from ingestion.streamflow_runner import StreamflowImporter

logger = logging.getLogger(__name__)


async def run_import():
    """Run station and streamflow imports for all configured regions"""

    db = get_database_manager()

    try:
        await db.initialize()

        stations = await StationImporter(db).import_all()
        logger.info(
            f"Stations: imported={stations.imported}, errors={stations.errors}, "
            f"total={stations.total}"
        )

        streamflow = await StreamflowImporter(db).import_all()
        logger.info(
            f"Streamflow: imported={streamflow.imported}, errors={streamflow.errors}, "
            f"skipped={streamflow.skipped}, failed={streamflow.failed}, total={streamflow.total}"
        )

        logger.info("All imports completed")

    except StoreError as e:
        logger.error(f"Import pipeline error: {e}")
        sys.exit(1)
    finally:
        await db.close()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(run_import())
