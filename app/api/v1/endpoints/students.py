from fastapi import APIRouter, Depends
from typing import List, Optional
from app.api.deps import get_student_service
from app.models.student import Student
from app.services.student.student import StudentService

router = APIRouter()


@router.get("/", response_model=List[Student])
def get_students(
    search: Optional[str] = None,
    service: StudentService = Depends(get_student_service)
):
    """
    List students, optionally filtered by name

    - **search**: case-insensitive substring of the student's name
    """
    return service.list_students(search)


@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: int,
    service: StudentService = Depends(get_student_service)
):
    """
    Get one student by ID
    """
    return service.get_student(student_id)
