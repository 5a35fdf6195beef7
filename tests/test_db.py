import asyncio

import pytest
from sqlalchemy import inspect
from sqlalchemy.future import select

from create_db import init_models
from reset_db import reset_models
from shared.db import atomic
from shared.errors import ConflictError, NotFoundError, StorageError
from services.class_management.models import ClassStudent, SchoolClass, Teacher


def _teacher(**overrides):
    fields = dict(
        full_name="Meera Iyer",
        email="meera@school.test",
        employee_id="EMP050",
        subjects="english",
        mobile_number="9000000050",
    )
    fields.update(overrides)
    return Teacher(**fields)


async def _teacher_emails(db):
    result = await db.execute(select(Teacher.email))
    return set(result.scalars().all())


async def test_atomic_commits_on_success(db):
    async with atomic(db):
        db.add(_teacher())

    assert await _teacher_emails(db) == {"meera@school.test"}


async def test_atomic_rolls_back_domain_errors(db):
    with pytest.raises(NotFoundError):
        async with atomic(db):
            db.add(_teacher())
            await db.flush()
            raise NotFoundError("missing")

    assert await _teacher_emails(db) == set()


async def test_atomic_rolls_back_on_cancellation(db):
    with pytest.raises(asyncio.CancelledError):
        async with atomic(db):
            db.add(_teacher())
            await db.flush()
            raise asyncio.CancelledError()

    assert await _teacher_emails(db) == set()


async def test_unique_violation_becomes_conflict(db):
    async with atomic(db):
        db.add(_teacher())

    with pytest.raises(ConflictError):
        async with atomic(db):
            db.add(_teacher(employee_id="EMP051"))

    assert await _teacher_emails(db) == {"meera@school.test"}


async def test_other_integrity_errors_become_storage_errors(db):
    with pytest.raises(StorageError):
        async with atomic(db):
            # Neither the class nor the student exists
            db.add(ClassStudent(class_id=1, student_id=1))


async def test_init_models_is_idempotent(engine):
    await init_models(engine)

    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    assert {"students", "teachers", "classes", "class_subjects", "class_students"} <= set(tables)


async def test_reset_models_empties_tables(engine, session_factory):
    async with session_factory() as session:
        session.add(SchoolClass(name="Scratch", standard="1", section="A", academic_year="2024-2025"))
        await session.commit()

    await reset_models(engine)

    async with session_factory() as session:
        result = await session.execute(select(SchoolClass))
        assert result.scalars().all() == []
