# services/class_management/models/students.py
from sqlalchemy import Column, Integer, String, Date, Text, DateTime, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.db import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    admission_number = Column(String(50), unique=True, nullable=False)
    standard = Column(String(10), nullable=False)
    section = Column(String(10), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    mobile_number = Column(String(15), nullable=False)
    address = Column(Text, nullable=True)
    parent_name = Column(String(255), nullable=True)
    blood_group = Column(String(5), nullable=True)
    aadhar_number = Column(String(12), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index("idx_student_standard_section", "standard", "section"),
    )

    __mapper_args__ = {"eager_defaults": True}

    # Removing a student vacates their seats; the database does the cascade
    enrollments = relationship(
        "ClassStudent",
        back_populates="student",
        cascade="all",
        passive_deletes=True,
    )
