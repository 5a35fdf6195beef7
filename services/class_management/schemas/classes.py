# services/class_management/schemas/classes.py
from typing import List, Optional
from datetime import datetime
from pydantic import Field

from .base import CamelModel, RecordId
from .students import StudentOut
from .subjects import SubjectAssignmentIn, ClassSubjectDetailOut


class ClassCreate(CamelModel):
    name: Optional[str] = None
    standard: Optional[str] = None
    section: Optional[str] = None
    academic_year: Optional[str] = None
    subjects: List[SubjectAssignmentIn] = Field(default_factory=list)
    students: List[RecordId] = Field(default_factory=list)


class ClassUpdate(CamelModel):
    name: Optional[str] = None
    standard: Optional[str] = None
    section: Optional[str] = None
    academic_year: Optional[str] = None
    subjects: Optional[List[SubjectAssignmentIn]] = None   # full replacement when given
    students: Optional[List[RecordId]] = None              # full replacement when given


class ClassFilters(CamelModel):
    standard: Optional[str] = None
    section: Optional[str] = None
    academic_year: Optional[str] = None


class ClassListItem(CamelModel):
    id: int
    name: str
    standard: str
    section: str
    academic_year: str
    student_count: int = 0
    subject_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClassView(ClassListItem):
    subjects: List[ClassSubjectDetailOut] = Field(default_factory=list)
    student_ids: List[int] = Field(default_factory=list)


# --- Response envelopes ---

class ClassResponse(CamelModel):
    success: bool = True
    msg: Optional[str] = None
    data: ClassView


class ClassListResponse(CamelModel):
    success: bool = True
    count: int
    data: List[ClassListItem]


class ClassSubjectsResponse(CamelModel):
    success: bool = True
    data: List[ClassSubjectDetailOut]


class ClassStudentsResponse(CamelModel):
    success: bool = True
    count: int
    data: List[StudentOut]


class MessageResponse(CamelModel):
    success: bool = True
    msg: str
