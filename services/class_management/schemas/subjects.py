# services/class_management/schemas/subjects.py
from typing import List, Optional
from pydantic import Field

from services.class_management.models.subjects import Subject
from .base import CamelModel, RecordId


class SubjectAssignmentIn(CamelModel):
    subject_id: Subject = Field(alias="id")
    # Checked by the class service so a missing teacher is reported per subject
    teacher_id: Optional[RecordId] = None


class ClassSubjectDetailOut(CamelModel):
    subject_id: Subject
    subject_name: str
    teacher_id: int
    teacher_name: str
    employee_id: str
    teacher_email: str


class SubjectCatalogItem(CamelModel):
    id: Subject
    name: str


class SubjectCatalogResponse(CamelModel):
    success: bool = True
    data: List[SubjectCatalogItem]
