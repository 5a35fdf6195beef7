# services/class_management/controllers/directory.py
"""
Student and teacher lookups used by the class service.

Records are created and edited elsewhere; this module only answers
"does it exist" questions and removes records while honouring the
class-composition rules (students cascade out of classes, teachers with
assignments cannot be removed).
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select

from shared.db import atomic
from shared.errors import ConflictError, NotFoundError
from services.class_management.models.students import Student
from services.class_management.models.teachers import Teacher

logger = logging.getLogger(__name__)


# --- STUDENTS ---
async def get_student_by_id(db: AsyncSession, student_id: int) -> Optional[Student]:
    return await db.get(Student, student_id)


async def get_student_by_admission_number(db: AsyncSession, admission_number: str) -> Optional[Student]:
    result = await db.execute(
        select(Student).where(Student.admission_number == admission_number)
    )
    return result.scalars().first()


async def get_student_by_email(db: AsyncSession, email: str) -> Optional[Student]:
    result = await db.execute(select(Student).where(Student.email == email))
    return result.scalars().first()


async def delete_student(db: AsyncSession, student_id: int) -> None:
    async with atomic(db):
        student = await db.get(Student, student_id)
        if not student:
            raise NotFoundError(f"Student with ID {student_id} not found")
        await db.delete(student)

    logger.info("Deleted student %s and their enrollments", student_id)


# --- TEACHERS ---
async def get_teacher_by_id(db: AsyncSession, teacher_id: int) -> Optional[Teacher]:
    return await db.get(Teacher, teacher_id)


async def get_teacher_by_employee_id(db: AsyncSession, employee_id: str) -> Optional[Teacher]:
    result = await db.execute(select(Teacher).where(Teacher.employee_id == employee_id))
    return result.scalars().first()


async def get_teacher_by_email(db: AsyncSession, email: str) -> Optional[Teacher]:
    result = await db.execute(select(Teacher).where(Teacher.email == email))
    return result.scalars().first()


async def delete_teacher(db: AsyncSession, teacher_id: int) -> None:
    async with atomic(db):
        teacher = await db.get(Teacher, teacher_id)
        if not teacher:
            raise NotFoundError(f"Teacher with ID {teacher_id} not found")

        await db.delete(teacher)
        try:
            # ON DELETE RESTRICT from class_subjects fires here
            await db.flush()
        except IntegrityError:
            logger.warning("Refused to delete teacher %s: still assigned to a class", teacher_id)
            raise ConflictError(
                f"Teacher with ID {teacher_id} is assigned to one or more classes"
            )

    logger.info("Deleted teacher %s", teacher_id)
