import logging
import threading
from typing import BinaryIO, List, Optional, Set, Union

from app.core.exceptions import NotFoundException
from app.models.student import Student
from app.schemas.student import StudentForm
from app.services.student.store import StudentStore
from app.services.student.uploads import UploadManager

logger = logging.getLogger(__name__)

UploadContent = Union[bytes, BinaryIO]


class StudentService:
    """
    CRUD over the in-memory student list.

    Every mutation runs validate -> mutate -> file side effects -> persist
    under one lock, and the whole list is written back after each change.
    """

    def __init__(self, store: StudentStore, uploads: UploadManager):
        self.store = store
        self.uploads = uploads
        self._lock = threading.RLock()
        self._students: List[Student] = store.load()
        self._last_id = max((s.id for s in self._students), default=0)
        logger.info(f"Loaded {len(self._students)} student(s) from {store.file_path}")

    # ---------- reads ----------
    def list_students(self, search: Optional[str] = None) -> List[Student]:
        """All students, or those whose name contains `search` (case-insensitive)."""
        term = (search or "").strip().casefold()
        with self._lock:
            return [
                s.model_copy()
                for s in self._students
                if not term or term in s.name.casefold()
            ]

    def get_student(self, student_id: int) -> Student:
        with self._lock:
            return self._find(student_id).model_copy()

    def live_refs(self) -> Set[str]:
        """Snapshot of every avatar currently referenced by a record."""
        with self._lock:
            return {s.avatar for s in self._students if s.avatar}

    # ---------- writes ----------
    def create_student(
        self,
        form: StudentForm,
        content: Optional[UploadContent] = None,
        filename: Optional[str] = None,
    ) -> Student:
        with self._lock:
            avatar = None
            if content is not None:
                avatar = self.uploads.store(content, filename)

            student = Student(
                id=self._next_id(),
                name=form.name,
                dob=form.dob,
                contact=form.contact,
                avatar=avatar,
            )
            self._students.append(student)
            self._last_id = student.id
            self.store.save(self._students)

            logger.info(f"Created student {student.id} ({student.name})")
            return student.model_copy()

    def update_student(
        self,
        student_id: int,
        form: StudentForm,
        content: Optional[UploadContent] = None,
        filename: Optional[str] = None,
    ) -> Student:
        """
        Overwrite a student's fields.

        A new upload is stored before the old file is removed, so the record
        never points at a deleted file.
        """
        with self._lock:
            student = self._find(student_id)

            old_avatar = student.avatar
            new_avatar = old_avatar
            if content is not None:
                new_avatar = self.uploads.store(content, filename)

            student.name = form.name
            student.dob = form.dob
            student.contact = form.contact
            student.avatar = new_avatar

            if new_avatar != old_avatar:
                self.uploads.delete(old_avatar)

            self.store.save(self._students)

            logger.info(f"Updated student {student.id}")
            return student.model_copy()

    def delete_student(self, student_id: int) -> bool:
        """Remove a student and its uploaded file. Unknown ids are a no-op."""
        with self._lock:
            for index, student in enumerate(self._students):
                if student.id == student_id:
                    break
            else:
                logger.debug(f"Delete of unknown student {student_id} ignored")
                return False

            del self._students[index]
            self.uploads.delete(student.avatar)
            self.store.save(self._students)

            logger.info(f"Deleted student {student_id}")
            return True

    # ---------- helpers ----------
    def _find(self, student_id: int) -> Student:
        for student in self._students:
            if student.id == student_id:
                return student
        raise NotFoundException("Student not found")

    def _next_id(self) -> int:
        highest = max((s.id for s in self._students), default=0)
        return max(highest, self._last_id) + 1
