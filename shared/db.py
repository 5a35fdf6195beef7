# shared/db.py
import logging
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from shared import config
from shared.errors import ConflictError, StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless this is switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str = config.DATABASE_URL, **kwargs) -> AsyncEngine:
    options = {"echo": config.DB_ECHO}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
            pool_timeout=config.DB_POOL_TIMEOUT,
            pool_pre_ping=True,
        )
    options.update(kwargs)

    new_engine = create_async_engine(url, **options)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


def _conflict_message(message: str) -> str:
    if "class_subject" in message:
        return "A subject can only be assigned once per class"
    if "class_student" in message:
        return "A student can only be enrolled once per class"
    if "standard" in message:
        return "A class with this standard, section and academic year already exists"
    return "Record already exists"


def classify_integrity_error(exc: IntegrityError):
    """Map a storage constraint failure onto ConflictError or StorageError."""
    message = str(exc.orig).lower()
    if "unique" in message or "duplicate" in message:
        logger.warning("Unique constraint rejected write: %s", exc.orig)
        return ConflictError(_conflict_message(message))

    logger.error("Integrity error: %s", exc.orig)
    return StorageError("Database constraint violated")


@asynccontextmanager
async def atomic(db: AsyncSession):
    """
    One logical transaction: commit when the block finishes, roll back on
    any other way out (domain errors, database errors, cancellation).
    """
    try:
        yield db
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise classify_integrity_error(e) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Database error, transaction rolled back")
        raise StorageError("Database error while saving changes") from e
    except BaseException:
        await db.rollback()
        raise
