# services/class_management/models/teachers.py
from sqlalchemy import Column, Integer, String, Date, Text, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.db import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    employee_id = Column(String(50), unique=True, nullable=False)
    qualification = Column(String(100), nullable=True)
    subjects = Column(Text, nullable=False)     # comma separated, e.g. "mathematics,physics"
    designation = Column(String(100), nullable=True)
    date_of_joining = Column(Date, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    mobile_number = Column(String(15), nullable=False)
    address = Column(Text, nullable=True)
    aadhar_number = Column(String(12), nullable=True)
    gender = Column(String(10), nullable=True)
    experience = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __mapper_args__ = {"eager_defaults": True}

    # passive_deletes="all" leaves the RESTRICT rule to the database
    class_subjects = relationship(
        "ClassSubject",
        back_populates="teacher",
        passive_deletes="all",
    )
