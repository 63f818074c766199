import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_data_file_inside_upload_dir_is_rejected(tmp_path):
    with pytest.raises(ValidationError):
        Settings(DATA_FILE=tmp_path / "data" / "students.json", UPLOAD_DIR=tmp_path / "data")


def test_data_file_beside_upload_dir_is_accepted(tmp_path):
    current = Settings(
        DATA_FILE=tmp_path / "data" / "students.json",
        UPLOAD_DIR=tmp_path / "data" / "uploads",
    )

    assert current.PORT == 3000


def test_sweep_interval_must_be_positive(tmp_path):
    with pytest.raises(ValidationError):
        Settings(
            DATA_FILE=tmp_path / "students.json",
            UPLOAD_DIR=tmp_path / "uploads",
            ORPHAN_SWEEP_INTERVAL_SECONDS=0,
        )
