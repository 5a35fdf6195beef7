# services/class_management/controllers/class_queries.py
from typing import List, Optional

from sqlalchemy import distinct, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from shared.errors import NotFoundError
from services.class_management.models.classes import SchoolClass, ClassSubject, ClassStudent
from services.class_management.models.students import Student
from services.class_management.models.subjects import Subject
from services.class_management.models.teachers import Teacher
from services.class_management.schemas.classes import ClassFilters, ClassListItem, ClassView
from services.class_management.schemas.students import StudentOut
from services.class_management.schemas.subjects import ClassSubjectDetailOut, SubjectCatalogItem


def _class_with_counts():
    # populate_existing refreshes classes already held by the session,
    # e.g. right after the class service committed an update
    return (
        select(
            SchoolClass,
            func.count(distinct(ClassStudent.student_id)).label("student_count"),
            func.count(distinct(ClassSubject.subject_id)).label("subject_count"),
        )
        .outerjoin(ClassStudent, ClassStudent.class_id == SchoolClass.id)
        .outerjoin(ClassSubject, ClassSubject.class_id == SchoolClass.id)
        .group_by(SchoolClass.id)
        .execution_options(populate_existing=True)
    )


def _list_item(school_class: SchoolClass, student_count, subject_count) -> ClassListItem:
    return ClassListItem(
        id=school_class.id,
        name=school_class.name,
        standard=school_class.standard,
        section=school_class.section,
        academic_year=school_class.academic_year,
        student_count=student_count or 0,
        subject_count=subject_count or 0,
        created_at=school_class.created_at,
        updated_at=school_class.updated_at,
    )


async def _class_exists(db: AsyncSession, class_id: int) -> bool:
    result = await db.execute(select(SchoolClass.id).where(SchoolClass.id == class_id))
    return result.scalar_one_or_none() is not None


async def find_class_by_details(
    db: AsyncSession,
    standard: str,
    section: str,
    academic_year: str
) -> Optional[SchoolClass]:
    result = await db.execute(
        select(SchoolClass).where(
            SchoolClass.standard == standard,
            SchoolClass.section == section,
            SchoolClass.academic_year == academic_year
        )
    )
    return result.scalars().first()


# --- LIST CLASSES ---
async def list_classes(db: AsyncSession, filters: Optional[ClassFilters] = None) -> List[ClassListItem]:
    stmt = _class_with_counts()

    if filters is not None:
        if filters.standard:
            stmt = stmt.where(SchoolClass.standard == filters.standard)
        if filters.section:
            stmt = stmt.where(SchoolClass.section == filters.section)
        if filters.academic_year:
            stmt = stmt.where(SchoolClass.academic_year == filters.academic_year)

    result = await db.execute(stmt.order_by(SchoolClass.standard, SchoolClass.section))
    return [
        _list_item(school_class, student_count, subject_count)
        for school_class, student_count, subject_count in result.all()
    ]


# --- CLASS DETAIL ---
async def get_class_by_id(db: AsyncSession, class_id: int) -> Optional[ClassView]:
    """
    Class with its subjects expanded to teacher details and its students as
    plain ids. Returns None when the class does not exist.
    """
    result = await db.execute(_class_with_counts().where(SchoolClass.id == class_id))
    row = result.first()
    if row is None:
        return None

    school_class, student_count, subject_count = row
    item = _list_item(school_class, student_count, subject_count)

    subjects = await _subjects_with_teachers(db, class_id)
    student_ids = await db.execute(
        select(ClassStudent.student_id)
        .where(ClassStudent.class_id == class_id)
        .order_by(ClassStudent.id)
    )

    return ClassView(
        **item.model_dump(),
        subjects=subjects,
        student_ids=list(student_ids.scalars().all()),
    )


async def _subjects_with_teachers(db: AsyncSession, class_id: int) -> List[ClassSubjectDetailOut]:
    result = await db.execute(
        select(
            ClassSubject.subject_id,
            ClassSubject.teacher_id,
            Teacher.full_name.label("teacher_name"),
            Teacher.employee_id,
            Teacher.email.label("teacher_email")
        )
        .join(Teacher, ClassSubject.teacher_id == Teacher.id)
        .where(ClassSubject.class_id == class_id)
    )

    return [
        ClassSubjectDetailOut(
            subject_id=row.subject_id,
            subject_name=row.subject_id.display_name,
            teacher_id=row.teacher_id,
            teacher_name=row.teacher_name,
            employee_id=row.employee_id,
            teacher_email=row.teacher_email
        )
        for row in result.all()
    ]


# --- CLASS SUBJECTS ---
async def get_class_subjects(db: AsyncSession, class_id: int) -> List[ClassSubjectDetailOut]:
    if not await _class_exists(db, class_id):
        raise NotFoundError("Class not found")
    return await _subjects_with_teachers(db, class_id)


# --- CLASS STUDENTS ---
async def get_class_students(db: AsyncSession, class_id: int) -> List[StudentOut]:
    if not await _class_exists(db, class_id):
        raise NotFoundError("Class not found")

    result = await db.execute(
        select(Student)
        .join(ClassStudent, ClassStudent.student_id == Student.id)
        .where(ClassStudent.class_id == class_id)
        .order_by(Student.full_name)
        .execution_options(populate_existing=True)
    )
    return [StudentOut.model_validate(student) for student in result.scalars().all()]


def subject_catalog() -> List[SubjectCatalogItem]:
    return [SubjectCatalogItem(id=subject, name=subject.display_name) for subject in Subject]
