from __future__ import annotations

from attendance_portal.core.enums import AttendanceStatus


def _login_professor(client, auth_service, semester="Fall 2024"):
    auth_service.register_professor(name="Ada", email="ada@uni.edu", password="secret1")
    return client.post(
        "/professor/login",
        data={"email": "ada@uni.edu", "password": "secret1", "semester": semester},
    )


def test_home_renders(client):
    res = client.get("/home")
    assert res.status_code == 200
    assert b"Attendance Portal" in res.data


def test_sheet_requires_professor_login(client):
    res = client.get("/professor/sheet")
    assert res.status_code == 302
    assert "/professor/login" in res.headers["Location"]


def test_professor_flow_add_record_and_remove(client, auth_service, attendance_service):
    res = _login_professor(client, auth_service)
    assert res.status_code == 302

    client.post("/professor/students/add", data={"roll_number": "CS-10", "name": "Bo"})
    client.post("/professor/students/add", data={"roll_number": "CS-9", "name": "Al"})

    res = client.get("/professor/sheet")
    assert res.status_code == 200
    assert res.data.index(b"CS-9") < res.data.index(b"CS-10")

    res = client.post(
        "/professor/attendance",
        data={"roll_numbers": ["CS-9", "CS-10"], "statuses": ["Present", "Absent"]},
    )
    assert res.status_code == 302

    rec = attendance_service.get_student(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9")
    assert rec.attendance_count == 1
    assert rec.events[0].status == AttendanceStatus.PRESENT

    assert client.post("/professor/students/CS-9/remove").status_code == 200
    assert client.post("/professor/students/CS-9/remove").status_code == 404


def test_student_sees_totals(client, auth_service, attendance_service):
    auth_service.register_student(name="Al", email="al@uni.edu", password="secret1", roll_number="CS-9")
    attendance_service.upsert_student(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9", name="Al")
    attendance_service.record_attendance(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9", status="Present")

    res = client.post("/login", data={"email": "al@uni.edu", "password": "secret1"})
    assert res.status_code == 302

    res = client.get("/student/attendance")
    assert res.status_code == 200
    assert b"<strong>1</strong>" in res.data


def test_student_cannot_open_professor_sheet(client, auth_service):
    auth_service.register_student(name="Al", email="al@uni.edu", password="secret1", roll_number="CS-9")
    client.post("/login", data={"email": "al@uni.edu", "password": "secret1"})

    assert client.get("/professor/sheet").status_code == 403


def test_feedback_submission(client, feedback_repo):
    res = client.post("/feedback", data={"name": "A", "email": "a@x.io", "message": "Nice"})

    assert res.status_code == 302
    assert feedback_repo.items[0].message == "Nice"


def _flashes(client):
    with client.session_transaction() as sess:
        return sess.get("_flashes", [])


def test_batch_without_fields_is_rejected(client, auth_service):
    _login_professor(client, auth_service)

    res = client.post("/professor/attendance", data={})

    assert res.status_code == 302
    assert ("danger", "Invalid attendance data") in _flashes(client)


def test_batch_with_only_roll_numbers_is_rejected(client, auth_service, attendance_service):
    _login_professor(client, auth_service)
    attendance_service.upsert_student(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9", name="Al")

    client.post("/professor/attendance", data={"roll_numbers": ["CS-9"]})

    assert ("danger", "Invalid attendance data") in _flashes(client)
    rec = attendance_service.get_student(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9")
    assert rec.events == ()


def test_records_page_shows_event_dates(client, auth_service, attendance_service, fixed_today):
    _login_professor(client, auth_service)
    attendance_service.upsert_student(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9", name="Al")
    attendance_service.record_attendance(
        owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9", status="Present", on=fixed_today
    )

    res = client.get("/professor/records")

    assert res.status_code == 200
    assert b"CS-9" in res.data
    assert b"2024-09-02" in res.data


def test_edit_and_update_student(client, auth_service, attendance_service):
    _login_professor(client, auth_service)
    attendance_service.upsert_student(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9", name="Al")

    res = client.get("/professor/students/edit", query_string={"roll_number": "CS-9"})
    assert res.status_code == 200
    assert b'value="Al"' in res.data

    res = client.post(
        "/professor/students/update",
        data={"roll_number": "CS-9", "name": "Alan", "class_name": "CS-A"},
    )
    assert res.status_code == 302
    rec = attendance_service.get_student(owner="ada@uni.edu", semester="Fall 2024", roll_number="CS-9")
    assert (rec.name, rec.class_name) == ("Alan", "CS-A")


def test_edit_unknown_student_redirects_to_sheet(client, auth_service):
    _login_professor(client, auth_service)

    res = client.get("/professor/students/edit", query_string={"roll_number": "CS-404"})

    assert res.status_code == 302
    assert "/professor/sheet" in res.headers["Location"]


def test_professor_directory_lists_professors(client, auth_service):
    auth_service.register_professor(name="Ada", email="ada@uni.edu", password="secret1", qualification="PhD")

    res = client.get("/professors")

    assert res.status_code == 200
    assert b"Ada" in res.data
    assert b"PhD" in res.data


def test_feedback_list_is_for_professors(client, auth_service, feedback_repo):
    client.post("/feedback", data={"name": "A", "email": "a@x.io", "message": "Nice course"})
    assert client.get("/feedback/list").status_code == 302

    _login_professor(client, auth_service)
    res = client.get("/feedback/list")

    assert res.status_code == 200
    assert b"Nice course" in res.data
