"""
HTML pages for browsing and editing student records.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.deps import get_student_service
from app.schemas.student import validate_student_form
from app.services.student.student import StudentService
from app.views.templating import templates

router = APIRouter()


def _uploaded(avatar: Optional[UploadFile]) -> Optional[UploadFile]:
    # An untouched file input still posts a part with an empty filename
    if avatar is None or isinstance(avatar, str) or not avatar.filename:
        return None
    return avatar


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    search: Optional[str] = None,
    service: StudentService = Depends(get_student_service),
):
    students = service.list_students(search)
    return templates.TemplateResponse(
        request, "index.html", {"students": students, "search": search or ""}
    )


@router.get("/student/{student_id}", response_class=HTMLResponse)
def view_student(
    request: Request,
    student_id: int,
    service: StudentService = Depends(get_student_service),
):
    student = service.get_student(student_id)
    return templates.TemplateResponse(request, "student.html", {"student": student})


@router.get("/addStudent", response_class=HTMLResponse)
def add_student_form(request: Request):
    return templates.TemplateResponse(request, "addStudent.html", {})


@router.post("/addStudent")
def add_student(
    name: str = Form(""),
    dob: str = Form(""),
    contact: str = Form(""),
    avatar: Optional[UploadFile] = File(None),
    service: StudentService = Depends(get_student_service),
):
    form = validate_student_form(name, dob, contact)
    upload = _uploaded(avatar)
    if upload is None:
        service.create_student(form)
    else:
        service.create_student(form, upload.file, upload.filename)
    return _redirect_home()


@router.get("/editStudent/{student_id}", response_class=HTMLResponse)
def edit_student_form(
    request: Request,
    student_id: int,
    service: StudentService = Depends(get_student_service),
):
    student = service.get_student(student_id)
    return templates.TemplateResponse(request, "editStudent.html", {"student": student})


@router.post("/editStudent/{student_id}")
def edit_student(
    student_id: int,
    name: str = Form(""),
    dob: str = Form(""),
    contact: str = Form(""),
    avatar: Optional[UploadFile] = File(None),
    service: StudentService = Depends(get_student_service),
):
    form = validate_student_form(name, dob, contact)
    upload = _uploaded(avatar)
    if upload is None:
        service.update_student(student_id, form)
    else:
        service.update_student(student_id, form, upload.file, upload.filename)
    return _redirect_home()


@router.post("/deleteStudent/{student_id}")
def delete_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
):
    service.delete_student(student_id)
    return _redirect_home()
