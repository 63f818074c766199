import json
import logging
import os
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from app.core.exceptions import StorageError
from app.models.student import Student

logger = logging.getLogger(__name__)

_student_list = TypeAdapter(List[Student])


def seed_students() -> List[Student]:
    """Default records used on first run or when the document is unreadable."""
    return [
        Student(id=1, name="Peter Tan", dob="2000-05-10", contact="91234567"),
        Student(id=2, name="Mary Lee", dob="2001-07-12", contact="98765432"),
    ]


class StudentStore:
    """
    Whole-document JSON persistence for the student list.

    Last writer wins; every save replaces the full document.
    """

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)

    def load(self) -> List[Student]:
        """
        Read all records from disk.

        Falls back to the seed records (and writes them back) when the
        document is missing or cannot be parsed. Never raises.
        """
        try:
            return self._read()
        except FileNotFoundError:
            logger.info(f"No data file at {self.file_path}, seeding defaults")
        except StorageError as e:
            logger.warning(f"{e.message}. Falling back to seed data")

        students = seed_students()
        self.save(students)
        return students

    def save(self, students: List[Student]) -> bool:
        """
        Overwrite the document with `students`.

        Returns False (after logging) if the write failed; callers keep
        their in-memory state either way.
        """
        try:
            self._write(students)
            return True
        except StorageError as e:
            logger.error(f"{e.message}. Changes kept in memory only")
            return False

    def _read(self) -> List[Student]:
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            raise
        except (OSError, ValueError) as e:
            raise StorageError(f"cannot read {self.file_path}: {e}") from e

        try:
            return _student_list.validate_python(raw)
        except ValueError as e:
            raise StorageError(f"unexpected content in {self.file_path}: {e}") from e

    def _write(self, students: List[Student]) -> None:
        payload = [s.model_dump(by_alias=True) for s in students]
        tmp_path = self.file_path.with_name(self.file_path.name + ".tmp")
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            try:
                tmp_path.unlink()
            except OSError:
                pass
            raise StorageError(f"cannot write {self.file_path}: {e}") from e
