import json

from app.models.student import Student
from app.services.student.store import StudentStore, seed_students


def test_missing_file_is_seeded_and_written(store):
    students = store.load()

    assert [s.name for s in students] == ["Peter Tan", "Mary Lee"]
    assert [s.id for s in students] == [1, 2]
    assert store.file_path.exists()
    on_disk = json.loads(store.file_path.read_text(encoding="utf-8"))
    assert on_disk[0] == {
        "studentId": 1,
        "name": "Peter Tan",
        "dob": "2000-05-10",
        "contact": "91234567",
        "avatar": None,
    }


def test_corrupt_document_falls_back_to_seed(store):
    store.file_path.parent.mkdir(parents=True)
    store.file_path.write_text("{not json", encoding="utf-8")

    students = store.load()

    assert students == seed_students()
    # seed was written back so the next read is stable
    assert store.load() == seed_students()


def test_wrong_structure_falls_back_to_seed(store):
    store.file_path.parent.mkdir(parents=True)
    store.file_path.write_text(json.dumps({"students": []}), encoding="utf-8")

    assert store.load() == seed_students()


def test_save_then_load_round_trips(store):
    students = [
        Student(id=4, name="Ann", dob="1999-01-02", contact="1234", avatar="abc_ann.png"),
        Student(id=9, name="Bob", dob="1998-03-04", contact="5678"),
    ]

    assert store.save(students) is True

    assert StudentStore(store.file_path).load() == students


def test_legacy_image_keys_are_read(store):
    store.file_path.parent.mkdir(parents=True)
    store.file_path.write_text(
        json.dumps([
            {"studentId": 1, "name": "A", "dob": "2000-01-01", "contact": "1", "photo": "a.jpg"},
            {"studentId": 2, "name": "B", "dob": "2000-01-01", "contact": "2", "image": "b.jpg"},
            {"studentId": 3, "name": "C", "dob": "2000-01-01", "contact": "3"},
        ]),
        encoding="utf-8",
    )

    students = store.load()

    assert [s.avatar for s in students] == ["a.jpg", "b.jpg", None]


def test_save_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = StudentStore(blocker / "students.json")

    assert store.save(seed_students()) is False
    # load never raises, even when nothing can be read or written
    assert store.load() == seed_students()
