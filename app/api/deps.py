from fastapi import Request

from app.services.student.student import StudentService


def get_student_service(request: Request) -> StudentService:
    """
    Dependency returning the StudentService created in the app lifespan.
    """
    return request.app.state.student_service
