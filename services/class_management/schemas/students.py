# services/class_management/schemas/students.py
from typing import Optional
from datetime import date, datetime

from .base import CamelModel


class StudentOut(CamelModel):
    id: int
    full_name: str
    email: str
    admission_number: str
    standard: str
    section: Optional[str] = None
    date_of_birth: Optional[date] = None
    mobile_number: str
    address: Optional[str] = None
    parent_name: Optional[str] = None
    blood_group: Optional[str] = None
    aadhar_number: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
