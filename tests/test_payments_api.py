from datetime import date

from fastapi.testclient import TestClient


def _create_payment(client: TestClient, teacher, student_id, amount=500, **extra):
    payload = {
        "student_id": student_id,
        "amount": amount,
        "payment_type": "tuition",
        "due_date": "2026-12-01",
        "semester": "Fall 2026",
        **extra,
    }
    response = client.post("/api/payments/", json=payload, headers=teacher)
    assert response.status_code == 201, response.text
    return response.json()


def test_student_cannot_mark_payment_paid(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, student = login("s@example.com")
    payment = _create_payment(client, teacher, student_id)
    assert payment["status"] == "pending"
    assert payment["paid_date"] is None

    url = f"/api/payments/{payment['id']}"
    assert client.get(url, headers=student).status_code == 200
    assert client.post(f"{url}/pay", headers=student).status_code == 403
    assert client.patch(f"{url}/status", json={"status": "paid"}, headers=student).status_code == 403
    assert client.get(url, headers=student).json()["status"] == "pending"

    paid = client.post(f"{url}/pay", headers=teacher)
    assert paid.status_code == 200
    assert paid.json()["status"] == "paid"
    assert paid.json()["paid_date"] == date.today().isoformat()


def test_paid_payment_cannot_be_reopened(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, _ = login("s@example.com")
    payment = _create_payment(client, teacher, student_id)
    url = f"/api/payments/{payment['id']}/status"

    response = client.patch(url, json={"status": "paid", "paid_date": "2026-10-01"}, headers=teacher)
    assert response.json()["paid_date"] == "2026-10-01"

    response = client.patch(url, json={"status": "pending"}, headers=teacher)
    assert response.status_code == 409
    assert response.json()["constraint"] == "payment_status_transition"


def test_overdue_then_paid(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, _ = login("s@example.com")
    payment = _create_payment(client, teacher, student_id)
    url = f"/api/payments/{payment['id']}/status"

    assert client.patch(url, json={"status": "overdue"}, headers=teacher).json()["status"] == "overdue"
    assert client.patch(url, json={"status": "paid"}, headers=teacher).json()["status"] == "paid"


def test_payments_visible_to_subject_and_teachers_only(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    _, other_teacher = login("t2@example.com", "teacher")
    s1_id, s1 = login("s1@example.com")
    s2_id, s2 = login("s2@example.com")
    p1 = _create_payment(client, teacher, s1_id)
    _create_payment(client, teacher, s2_id, amount=200)

    assert client.get("/api/payments/", headers=teacher).json()["total"] == 2
    assert client.get("/api/payments/", headers=other_teacher).json()["total"] == 2
    mine = client.get("/api/payments/", headers=s1).json()
    assert [p["id"] for p in mine["payments"]] == [p1["id"]]
    assert client.get(f"/api/payments/{p1['id']}", headers=s2).status_code == 404
    # filtering on someone else's id just yields nothing
    assert client.get("/api/payments/", params={"student_id": s1_id}, headers=s2).json()["total"] == 0


def test_student_cannot_create_or_delete_payments(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, student = login("s@example.com")
    payload = {"student_id": student_id, "amount": 1, "payment_type": "lab", "due_date": "2026-12-01"}
    assert client.post("/api/payments/", json=payload, headers=student).status_code == 403

    payment = _create_payment(client, teacher, student_id)
    assert client.delete(f"/api/payments/{payment['id']}", headers=student).status_code == 403
    assert client.delete(f"/api/payments/{payment['id']}", headers=teacher).status_code == 204


def test_payment_summary_totals(client: TestClient, login):
    _, teacher = login("t@example.com", "teacher")
    student_id, student = login("s@example.com")
    _create_payment(client, teacher, student_id, amount=500)
    paid = _create_payment(client, teacher, student_id, amount=150)
    client.post(f"/api/payments/{paid['id']}/pay", headers=teacher)

    summary = client.get("/api/payments/summary", headers=student).json()
    assert summary == {"total_pending": 500.0, "total_paid": 150.0, "total_overdue": 0, "count": 2}

    pending = client.get("/api/payments/", params={"status": "pending"}, headers=student).json()
    assert pending["total"] == 1
