# reset_db.py
import asyncio
import logging

from shared.db import engine as default_engine, Base
import services.class_management.models

logger = logging.getLogger(__name__)


async def reset_models(engine=None):
    """Drop and recreate every table. Development use only."""
    engine = engine or default_engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.warning("Database reset: all tables dropped and recreated")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(reset_models())
