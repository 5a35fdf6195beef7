# services/class_management/models/classes.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.db import Base
from .subjects import Subject


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)          # E.g., "Class VIII-A"
    standard = Column(String(10), nullable=False)       # E.g., "8"
    section = Column(String(10), nullable=False)        # E.g., "A"
    academic_year = Column(String(20), nullable=False)  # E.g., "2024-2025"
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("standard", "section", "academic_year", name="uq_class_standard_section_year"),
        Index("ix_class_standard_section", "standard", "section"),
    )
    __mapper_args__ = {"eager_defaults": True}

    class_subjects = relationship(
        "ClassSubject",
        back_populates="school_class",
        cascade="all",
        passive_deletes=True,
    )
    class_students = relationship(
        "ClassStudent",
        back_populates="school_class",
        cascade="all",
        passive_deletes=True,
    )


# One subject of the catalog taught by one teacher in one class
class ClassSubject(Base):
    __tablename__ = "class_subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    subject_id = Column(
        Enum(
            Subject,
            name="subject_id",
            native_enum=False,
            length=50,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="RESTRICT"), nullable=False)

    __table_args__ = (
        UniqueConstraint("class_id", "subject_id", name="uq_class_subject"),
        Index("ix_class_subject_teacher", "teacher_id"),
    )

    school_class = relationship("SchoolClass", back_populates="class_subjects")
    teacher = relationship("Teacher", back_populates="class_subjects")


# Student enrolled in a class
class ClassStudent(Base):
    __tablename__ = "class_students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint("class_id", "student_id", name="uq_class_student"),
        Index("ix_class_student_student", "student_id"),
    )

    school_class = relationship("SchoolClass", back_populates="class_students")
    student = relationship("Student", back_populates="enrollments")
