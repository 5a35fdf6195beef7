# services/class_management/api/class_router.py
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.db import get_db
from shared.errors import NotFoundError
from services.class_management.controllers import class_queries, class_service
from services.class_management.schemas.classes import (
    ClassCreate,
    ClassUpdate,
    ClassFilters,
    ClassResponse,
    ClassListResponse,
    ClassSubjectsResponse,
    ClassStudentsResponse,
    MessageResponse
)
from services.class_management.schemas.subjects import SubjectCatalogResponse
from services.class_management.schemas.base import MAX_RECORD_ID

router = APIRouter(prefix="/class", tags=["Classes"])

ClassId = Annotated[int, Path(ge=1, le=MAX_RECORD_ID)]


# --- CREATE CLASS WITH SUBJECTS AND STUDENTS ---
@router.post("/create", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class(payload: ClassCreate, db: AsyncSession = Depends(get_db)):
    new_class = await class_service.create_class(db, payload)
    return ClassResponse(msg="Class created successfully", data=new_class)


# --- LIST CLASSES ---
# /class/all?standard=8&section=A&academicYear=2024-2025
@router.get("/all", response_model=ClassListResponse)
async def get_all_classes(
    standard: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    academic_year: Optional[str] = Query(None, alias="academicYear"),
    db: AsyncSession = Depends(get_db)
):
    filters = ClassFilters(standard=standard, section=section, academic_year=academic_year)
    classes = await class_queries.list_classes(db, filters)
    return ClassListResponse(count=len(classes), data=classes)


# --- SUBJECT CATALOG ---
@router.get("/subject-catalog", response_model=SubjectCatalogResponse)
async def get_subject_catalog():
    return SubjectCatalogResponse(data=class_queries.subject_catalog())


# --- GET CLASS BY ID ---
@router.get("/{class_id}", response_model=ClassResponse)
async def get_class_by_id(class_id: ClassId, db: AsyncSession = Depends(get_db)):
    class_data = await class_queries.get_class_by_id(db, class_id)
    if class_data is None:
        raise NotFoundError("Class not found")
    return ClassResponse(data=class_data)


# --- UPDATE CLASS ---
@router.put("/{class_id}", response_model=ClassResponse)
async def update_class(class_id: ClassId, patch: ClassUpdate, db: AsyncSession = Depends(get_db)):
    updated_class = await class_service.update_class(db, class_id, patch)
    return ClassResponse(msg="Class updated successfully", data=updated_class)


# --- DELETE CLASS ---
@router.delete("/{class_id}", response_model=MessageResponse)
async def delete_class(class_id: ClassId, db: AsyncSession = Depends(get_db)):
    await class_service.delete_class(db, class_id)
    return MessageResponse(msg="Class deleted successfully")


# --- SUBJECTS (WITH TEACHERS) OF A CLASS ---
@router.get("/{class_id}/subjects", response_model=ClassSubjectsResponse)
async def get_class_subjects(class_id: ClassId, db: AsyncSession = Depends(get_db)):
    subjects = await class_queries.get_class_subjects(db, class_id)
    return ClassSubjectsResponse(data=subjects)


# --- STUDENTS OF A CLASS ---
@router.get("/{class_id}/students", response_model=ClassStudentsResponse)
async def get_class_students(class_id: ClassId, db: AsyncSession = Depends(get_db)):
    students = await class_queries.get_class_students(db, class_id)
    return ClassStudentsResponse(count=len(students), data=students)
