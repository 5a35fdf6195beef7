import pytest
from sqlalchemy.exc import OperationalError

from shared.errors import ConflictError, NotFoundError, StorageError
from services.class_management.controllers import directory as people
from services.class_management.controllers.class_queries import get_class_by_id
from services.class_management.controllers.class_service import create_class, update_class
from services.class_management.models.subjects import Subject
from services.class_management.schemas.classes import ClassUpdate
from services.class_management.schemas.subjects import SubjectAssignmentIn


async def test_student_lookups(db, directory):
    assert (await people.get_student_by_id(db, 101)).full_name == "Rohan Verma"
    assert (await people.get_student_by_admission_number(db, "ADM102")).id == 102
    assert (await people.get_student_by_email(db, "zoya@school.test")).id == 103
    assert await people.get_student_by_id(db, 1) is None
    assert await people.get_student_by_admission_number(db, "ADM999") is None


async def test_teacher_lookups(db, directory):
    assert (await people.get_teacher_by_id(db, 7)).employee_id == "EMP007"
    assert (await people.get_teacher_by_employee_id(db, "EMP008")).id == 8
    assert (await people.get_teacher_by_email(db, "anita.sharma@school.test")).id == 7
    assert await people.get_teacher_by_email(db, "nobody@school.test") is None


async def test_deleting_a_student_vacates_their_seat(db, directory, make_class):
    created = await create_class(db, make_class(students=[101, 102]))

    await people.delete_student(db, 101)

    view = await get_class_by_id(db, created.id)
    assert view.student_ids == [102]
    assert view.student_count == 1
    assert await people.get_student_by_id(db, 101) is None


async def test_deleting_unknown_student_is_not_found(db, directory):
    with pytest.raises(NotFoundError):
        await people.delete_student(db, 404)


async def test_assigned_teacher_cannot_be_deleted(db, directory, make_class):
    created = await create_class(db, make_class())

    with pytest.raises(ConflictError, match="assigned to one or more classes"):
        await people.delete_teacher(db, 7)

    view = await get_class_by_id(db, created.id)
    assert [s.teacher_id for s in view.subjects] == [7]
    assert await people.get_teacher_by_employee_id(db, "EMP007") is not None


async def test_teacher_can_be_deleted_once_unassigned(db, directory, make_class):
    created = await create_class(db, make_class())
    await update_class(
        db,
        created.id,
        ClassUpdate(subjects=[SubjectAssignmentIn(subject_id=Subject.MATHEMATICS, teacher_id=8)]),
    )

    await people.delete_teacher(db, 7)

    assert await people.get_teacher_by_employee_id(db, "EMP007") is None


async def test_deleting_unknown_teacher_is_not_found(db, directory):
    with pytest.raises(NotFoundError):
        await people.delete_teacher(db, 404)


async def test_teacher_delete_storage_failure_rolls_back(db, directory, monkeypatch):
    async def failing_flush(*args, **kwargs):
        raise OperationalError("DELETE FROM teachers", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "flush", failing_flush)
    with pytest.raises(StorageError):
        await people.delete_teacher(db, 8)
    monkeypatch.undo()

    assert (await people.get_teacher_by_employee_id(db, "EMP008")).full_name == "Vikram Rao"
