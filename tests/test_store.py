from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from edutrackers.errors import AuthorizationDenied, ConstraintViolation, ReferentialFailure
from edutrackers.models import Assignment, Payment, Profile, Result, Submission
from edutrackers.store import ScopedStore, entity_for, row_to_dict, translate_integrity_error


@pytest.fixture
def people(make_profile):
    return {
        "teacher": make_profile("teacher@example.com", "teacher", department="Maths"),
        "s1": make_profile("s1@example.com"),
        "s2": make_profile("s2@example.com"),
    }


def _store(session, profile) -> ScopedStore:
    return ScopedStore(session, profile.id)


def test_select_narrows_profiles_per_requester(session, people) -> None:
    teacher_view = _store(session, people["teacher"]).select(Profile)
    student_view = _store(session, people["s1"]).select(Profile)
    assert len(teacher_view) == 3
    assert [p.id for p in student_view] == [people["s1"].id]


def test_get_returns_none_for_hidden_rows(session, people) -> None:
    store = _store(session, people["s1"])
    assert store.get(Profile, people["s2"].id) is None
    assert store.get(Profile, "missing") is None


def test_student_cannot_insert_assignment(session, people) -> None:
    store = _store(session, people["s1"])
    with pytest.raises(AuthorizationDenied):
        store.insert(Assignment, teacher_id=people["s1"].id, title="Homework")
    assert session.query(Assignment).count() == 0


def test_duplicate_submission_rejected_by_unique_constraint(session, people) -> None:
    assignment = _store(session, people["teacher"]).insert(
        Assignment, teacher_id=people["teacher"].id, title="Essay"
    )
    store = _store(session, people["s1"])
    store.insert(Submission, assignment_id=assignment.id, student_id=people["s1"].id)

    with pytest.raises(ConstraintViolation) as excinfo:
        store.insert(Submission, assignment_id=assignment.id, student_id=people["s1"].id)
    assert excinfo.value.constraint == "assignment_submissions_assignment_id_student_id_key"
    assert session.query(Submission).count() == 1


def test_submission_for_missing_assignment_is_referential_failure(session, people) -> None:
    store = _store(session, people["s1"])
    with pytest.raises(ReferentialFailure):
        store.insert(Submission, assignment_id="no-such-assignment", student_id=people["s1"].id)


def test_result_check_constraint_rejects_zero_total(session, people) -> None:
    store = _store(session, people["teacher"])
    with pytest.raises(ConstraintViolation):
        store.insert(
            Result,
            student_id=people["s1"].id,
            teacher_id=people["teacher"].id,
            exam_type="CT",
            subject="Maths",
            marks_obtained=5,
            total_marks=0,
            exam_date=date(2026, 3, 1),
        )
    assert session.query(Result).count() == 0


def test_update_of_hidden_row_is_denied(session, people) -> None:
    payment = _store(session, people["teacher"]).insert(
        Payment,
        student_id=people["s1"].id,
        amount=100,
        payment_type="lab",
        due_date=date(2026, 5, 1),
    )
    with pytest.raises(AuthorizationDenied):
        _store(session, people["s2"]).update(Payment, payment.id, amount=0)


def test_profile_self_update(session, people) -> None:
    store = _store(session, people["s1"])
    updated = store.update(Profile, people["s1"].id, phone="555-0101")
    assert updated.phone == "555-0101"
    with pytest.raises(AuthorizationDenied):
        store.update(Profile, people["s1"].id, role="teacher")


def test_entity_for_rejects_unprotected_models() -> None:
    from edutrackers.models import Identity

    with pytest.raises(TypeError):
        entity_for(Identity)


def test_row_to_dict_uses_column_attributes(session, people) -> None:
    row = row_to_dict(people["teacher"])
    assert row["id"] == people["teacher"].id
    assert row["department"] == "Maths"
    assert "assignments" not in row


def test_student_cannot_insert_graded_submission(session, people) -> None:
    assignment = _store(session, people["teacher"]).insert(
        Assignment, teacher_id=people["teacher"].id, title="Essay"
    )
    store = _store(session, people["s1"])
    with pytest.raises(AuthorizationDenied):
        store.insert(
            Submission,
            assignment_id=assignment.id,
            student_id=people["s1"].id,
            grade=100.0,
            status="graded",
            feedback="self-graded",
        )
    assert session.query(Submission).count() == 0


@pytest.mark.parametrize(
    "driver_message",
    [
        "CHECK constraint failed: results_total_marks_check",
        'new row for relation "results" violates check constraint "results_total_marks_check"',
    ],
)
def test_check_constraint_name_is_parsed(driver_message) -> None:
    error = translate_integrity_error(IntegrityError("INSERT", {}, Exception(driver_message)))
    assert isinstance(error, ConstraintViolation)
    assert error.constraint == "results_total_marks_check"
