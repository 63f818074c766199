def test_list_students(client):
    res = client.get("/api/v1/students/")

    assert res.status_code == 200
    assert [s["name"] for s in res.json()] == ["Peter Tan", "Mary Lee"]


def test_search_students(client):
    res = client.get("/api/v1/students/", params={"search": "TAN"})

    assert [s["studentId"] for s in res.json()] == [1]


def test_get_student(client):
    res = client.get("/api/v1/students/2")

    assert res.status_code == 200
    assert res.json() == {
        "studentId": 2,
        "name": "Mary Lee",
        "dob": "2001-07-12",
        "contact": "98765432",
        "avatar": None,
    }


def test_get_unknown_student(client):
    res = client.get("/api/v1/students/999")

    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "Student not found", "details": None},
    }


def test_non_numeric_id_is_rejected(client):
    res = client.get("/api/v1/students/abc")

    assert res.status_code == 422
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


def test_health(client):
    assert client.get("/health").status_code == 200
