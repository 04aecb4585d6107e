from fastapi.testclient import TestClient


def _result_payload(student_id, marks=45, total=50, **extra):
    return {
        "student_id": student_id,
        "exam_type": "Midterm",
        "subject": "Chemistry",
        "marks_obtained": marks,
        "total_marks": total,
        "exam_date": "2026-09-15",
        **extra,
    }


def test_teacher_records_result_with_grade(client: TestClient, login):
    teacher_id, teacher = login("t@example.com", "teacher")
    student_id, student = login("s@example.com")

    response = client.post("/api/results/", json=_result_payload(student_id), headers=teacher)
    assert response.status_code == 201
    data = response.json()
    assert data["teacher_id"] == teacher_id
    assert data["percentage"] == 90.0
    assert data["letter_grade"] == "A+"

    mine = client.get("/api/results/", headers=student).json()
    assert [r["id"] for r in mine["results"]] == [data["id"]]


def test_results_hidden_from_other_students(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    s1_id, _ = login("s1@example.com")
    _, s2 = login("s2@example.com")
    result = client.post("/api/results/", json=_result_payload(s1_id), headers=teacher).json()

    assert client.get("/api/results/", headers=s2).json()["total"] == 0
    assert client.get(f"/api/results/{result['id']}", headers=s2).status_code == 404


def test_any_teacher_reads_results_but_only_author_updates(client: TestClient, login):
    _, author = login("t1@example.com", "teacher")
    _, colleague = login("t2@example.com", "teacher")
    student_id, _ = login("s@example.com")
    result = client.post("/api/results/", json=_result_payload(student_id), headers=author).json()
    url = f"/api/results/{result['id']}"

    assert client.get(url, headers=colleague).status_code == 200
    assert client.patch(url, json={"remarks": "recheck"}, headers=colleague).status_code == 403

    updated = client.patch(url, json={"marks_obtained": 30}, headers=author)
    assert updated.status_code == 200
    assert updated.json()["letter_grade"] == "C"


def test_student_cannot_record_results(client: TestClient, login):
    student_id, student = login("s@example.com")
    response = client.post("/api/results/", json=_result_payload(student_id), headers=student)
    assert response.status_code == 403


def test_total_marks_must_be_positive(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, _ = login("s@example.com")
    response = client.post("/api/results/", json=_result_payload(student_id, total=0), headers=teacher)
    assert response.status_code == 422


def test_result_for_unknown_student(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    response = client.post("/api/results/", json=_result_payload("ghost"), headers=teacher)
    assert response.status_code == 404


def test_results_summary(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, student = login("s@example.com")
    client.post("/api/results/", json=_result_payload(student_id, marks=45, total=50), headers=teacher)
    client.post("/api/results/", json=_result_payload(student_id, marks=30, total=50), headers=teacher)

    summary = client.get("/api/results/summary", headers=student).json()
    assert summary["count"] == 2
    assert summary["average_percentage"] == 75.0
    assert summary["marks_obtained"] == 75.0
    assert summary["total_marks"] == 100.0

    empty = client.get("/api/results/summary", headers=login("s2@example.com")[1]).json()
    assert empty["count"] == 0
    assert empty["average_percentage"] is None


def test_update_cannot_blank_exam_type_or_subject(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, _ = login("s@example.com")
    result = client.post("/api/results/", json=_result_payload(student_id), headers=teacher).json()
    url = f"/api/results/{result['id']}"

    assert client.patch(url, json={"exam_type": ""}, headers=teacher).status_code == 422
    assert client.patch(url, json={"subject": ""}, headers=teacher).status_code == 422
    assert client.get(url, headers=teacher).json()["subject"] == "Chemistry"
