# services/class_management/controllers/class_service.py
"""
Class composition: a class is always written together with its subject
assignments and student enrollments, inside a single transaction.

Views returned by these functions are read back through class_queries
after the commit, so callers always see what was actually stored.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from shared import config
from shared.db import atomic
from shared.errors import ConflictError, NotFoundError, SchoolRecordsError, ValidationError
from services.class_management.controllers.class_queries import find_class_by_details, get_class_by_id
from services.class_management.controllers.directory import get_student_by_id, get_teacher_by_id
from services.class_management.models.classes import SchoolClass, ClassSubject, ClassStudent
from services.class_management.schemas.classes import ClassCreate, ClassUpdate, ClassView
from services.class_management.schemas.subjects import SubjectAssignmentIn

logger = logging.getLogger(__name__)

_CLASS_FIELDS = ("name", "standard", "section", "academic_year")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _effective_academic_year(requested: Optional[str], default: Optional[str]) -> str:
    for candidate in (requested, default, config.DEFAULT_ACADEMIC_YEAR):
        if not _is_blank(candidate):
            return candidate.strip()
    return str(date.today().year)


def _triple_conflict(standard: str, section: str, academic_year: str) -> ConflictError:
    return ConflictError(f"Class {standard}-{section} already exists for academic year {academic_year}")


async def _check_subjects(db: AsyncSession, subjects: Iterable[SubjectAssignmentIn]) -> None:
    for subject in subjects:
        if subject.teacher_id is None:
            raise ValidationError(f"Teacher not assigned for subject {subject.subject_id.value}")

        teacher = await get_teacher_by_id(db, subject.teacher_id)
        if not teacher:
            raise NotFoundError(f"Teacher with ID {subject.teacher_id} not found")


async def _check_students(db: AsyncSession, student_ids: Iterable[int]) -> None:
    for student_id in student_ids:
        student = await get_student_by_id(db, student_id)
        if not student:
            raise NotFoundError(f"Student with ID {student_id} not found")


def _add_subjects(db: AsyncSession, class_id: int, subjects: List[SubjectAssignmentIn]) -> None:
    db.add_all([
        ClassSubject(class_id=class_id, subject_id=subject.subject_id, teacher_id=subject.teacher_id)
        for subject in subjects
    ])


def _add_students(db: AsyncSession, class_id: int, student_ids: List[int]) -> None:
    db.add_all([
        ClassStudent(class_id=class_id, student_id=student_id)
        for student_id in student_ids
    ])


# --- CREATE CLASS ---
async def create_class(
    db: AsyncSession,
    payload: ClassCreate,
    default_academic_year: Optional[str] = None
) -> ClassView:
    if _is_blank(payload.name) or _is_blank(payload.standard) or _is_blank(payload.section):
        raise ValidationError("Please provide all required fields: name, standard, and section")
    if not payload.subjects:
        raise ValidationError("Please provide at least one subject with an assigned teacher")
    if not payload.students:
        raise ValidationError("Please enroll at least one student in the class")

    name = payload.name.strip()
    standard = payload.standard.strip()
    section = payload.section.strip()
    academic_year = _effective_academic_year(payload.academic_year, default_academic_year)

    try:
        async with atomic(db):
            # Convenience check; uq_class_standard_section_year is the real guard
            if await find_class_by_details(db, standard, section, academic_year):
                raise _triple_conflict(standard, section, academic_year)

            await _check_subjects(db, payload.subjects)
            await _check_students(db, payload.students)

            new_class = SchoolClass(
                name=name,
                standard=standard,
                section=section,
                academic_year=academic_year
            )
            db.add(new_class)
            await db.flush()

            _add_subjects(db, new_class.id, payload.subjects)
            _add_students(db, new_class.id, payload.students)
            await db.flush()
            class_id = new_class.id
    except SchoolRecordsError as e:
        logger.warning("Class %s-%s (%s) not created: %s", standard, section, academic_year, e.msg)
        raise

    logger.info(
        "Created class %s (%s-%s, %s) with %d subjects and %d students",
        class_id, standard, section, academic_year, len(payload.subjects), len(payload.students)
    )
    return await get_class_by_id(db, class_id)


# --- UPDATE CLASS ---
async def update_class(db: AsyncSession, class_id: int, patch: ClassUpdate) -> ClassView:
    """
    Apply a partial update. `subjects` and `students`, when given, replace
    the existing assignments/enrollments wholesale; when omitted they are
    left alone.
    """
    changes = {}
    for field in _CLASS_FIELDS:
        value = getattr(patch, field)
        if value is None:
            continue
        if _is_blank(value):
            raise ValidationError(f"{field} cannot be empty")
        changes[field] = value.strip()

    if patch.subjects is not None and not patch.subjects:
        raise ValidationError("Please provide at least one subject with an assigned teacher")
    if patch.students is not None and not patch.students:
        raise ValidationError("Please enroll at least one student in the class")

    try:
        async with atomic(db):
            school_class = await db.get(SchoolClass, class_id, populate_existing=True)
            if not school_class:
                raise NotFoundError("Class not found")

            current = (school_class.standard, school_class.section, school_class.academic_year)
            wanted = (
                changes.get("standard", school_class.standard),
                changes.get("section", school_class.section),
                changes.get("academic_year", school_class.academic_year),
            )
            if wanted != current:
                existing = await find_class_by_details(db, *wanted)
                if existing and existing.id != school_class.id:
                    raise _triple_conflict(*wanted)

            if patch.subjects is not None:
                await _check_subjects(db, patch.subjects)
            if patch.students is not None:
                await _check_students(db, patch.students)

            for field, value in changes.items():
                setattr(school_class, field, value)

            if patch.subjects is not None:
                await db.execute(delete(ClassSubject).where(ClassSubject.class_id == class_id))
                _add_subjects(db, class_id, patch.subjects)

            if patch.students is not None:
                await db.execute(delete(ClassStudent).where(ClassStudent.class_id == class_id))
                _add_students(db, class_id, patch.students)

            if changes or patch.subjects is not None or patch.students is not None:
                school_class.updated_at = func.now()
            await db.flush()
    except SchoolRecordsError as e:
        logger.warning("Class %s not updated: %s", class_id, e.msg)
        raise

    logger.info("Updated class %s (fields: %s)", class_id, ", ".join(sorted(changes)) or "none")
    return await get_class_by_id(db, class_id)


# --- DELETE CLASS ---
async def delete_class(db: AsyncSession, class_id: int) -> None:
    try:
        async with atomic(db):
            school_class = await db.get(SchoolClass, class_id, populate_existing=True)
            if not school_class:
                raise NotFoundError("Class not found")

            await db.execute(delete(ClassSubject).where(ClassSubject.class_id == class_id))
            await db.execute(delete(ClassStudent).where(ClassStudent.class_id == class_id))
            await db.delete(school_class)
    except SchoolRecordsError as e:
        logger.warning("Class %s not deleted: %s", class_id, e.msg)
        raise

    logger.info("Deleted class %s", class_id)
