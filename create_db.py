# create_db.py
import asyncio
import logging

from shared.db import engine as default_engine, Base

# Import all models here so they are registered with SQLAlchemy's metadata
import services.class_management.models

logger = logging.getLogger(__name__)


async def init_models(engine=None):
    """Create any missing tables. Safe to run more than once."""
    engine = engine or default_engine
    async with engine.begin() as conn:
        logger.info("🔧 Creating tables...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Tables created.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_models())
