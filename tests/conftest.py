from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from create_db import init_models
from main import app
from shared.db import build_engine, build_sessionmaker, get_db
from services.class_management.models import Student, Teacher
from services.class_management.models.subjects import Subject
from services.class_management.schemas.classes import ClassCreate
from services.class_management.schemas.subjects import SubjectAssignmentIn


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'school_records.db'}")
    await init_models(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def directory(db):
    teachers = [
        Teacher(
            id=7,
            full_name="Anita Sharma",
            email="anita.sharma@school.test",
            employee_id="EMP007",
            subjects="mathematics,physics",
            designation="PGT",
            mobile_number="9000000007",
        ),
        Teacher(
            id=8,
            full_name="Vikram Rao",
            email="vikram.rao@school.test",
            employee_id="EMP008",
            subjects="science,biology",
            designation="TGT",
            mobile_number="9000000008",
        ),
    ]
    students = [
        Student(
            id=101,
            full_name="Rohan Verma",
            email="rohan@school.test",
            admission_number="ADM101",
            standard="8",
            section="A",
            date_of_birth=date(2011, 4, 12),
            mobile_number="9100000101",
        ),
        Student(
            id=102,
            full_name="Aarav Mehta",
            email="aarav@school.test",
            admission_number="ADM102",
            standard="8",
            section="A",
            mobile_number="9100000102",
        ),
        Student(
            id=103,
            full_name="Zoya Khan",
            email="zoya@school.test",
            admission_number="ADM103",
            standard="8",
            section="B",
            mobile_number="9100000103",
        ),
    ]
    db.add_all(teachers + students)
    await db.commit()
    return {"teachers": teachers, "students": students}


def _make_class(**overrides) -> ClassCreate:
    fields = {
        "name": "Class VIII-A",
        "standard": "8",
        "section": "A",
        "academic_year": "2024-2025",
        "subjects": [SubjectAssignmentIn(subject_id=Subject.MATHEMATICS, teacher_id=7)],
        "students": [101, 102],
    }
    fields.update(overrides)
    return ClassCreate(**fields)


@pytest.fixture
def make_class():
    return _make_class


@pytest.fixture
async def client(session_factory, directory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
