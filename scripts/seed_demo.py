"""Seed a local database with a demo teacher, two students and some rows."""
import sys
from datetime import date, timedelta
from pathlib import Path

# make the project root importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from edutrackers.db import Base, SessionLocal, engine, ensure_database_directory
from edutrackers.errors import ConstraintViolation
from edutrackers.models import Announcement, Assignment, Identity, Payment, Profile
from edutrackers.provisioning import sign_up
from edutrackers.store import ScopedStore

PASSWORD = "password123"

USERS = [
    ("teacher@example.com", {"full_name": "Demo Teacher", "role": "teacher", "department": "Science"}),
    ("asha@example.com", {"full_name": "Asha Rao", "role": "student", "roll_number": "S-001", "course": "BSc"}),
    ("ben@example.com", {"full_name": "Ben Ortiz", "role": "student", "roll_number": "S-002", "course": "BSc"}),
]


def _profile_for(db, email: str, metadata: dict) -> Profile:
    try:
        return sign_up(db, email, PASSWORD, metadata)
    except ConstraintViolation:
        identity = db.query(Identity).filter(Identity.email == email).one()
        return db.get(Profile, identity.id)


def seed():
    print("=" * 50)
    print("Seeding EduTrackers demo data")
    print("=" * 50)

    ensure_database_directory(engine)
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        print("\n[1/3] Profiles...")
        teacher, *students = [_profile_for(db, email, meta) for email, meta in USERS]
        print(f"  teacher: {teacher.email}")
        for student in students:
            print(f"  student: {student.email}")

        store = ScopedStore(db, teacher.id)

        print("\n[2/3] Assignment and announcement...")
        if not store.select(Assignment, Assignment.teacher_id == teacher.id):
            store.insert(
                Assignment,
                teacher_id=teacher.id,
                title="Lab report: pendulum",
                course="BSc",
                description="Measure the period for three string lengths.",
            )
        if not store.select(Announcement, Announcement.teacher_id == teacher.id):
            store.insert(
                Announcement,
                teacher_id=teacher.id,
                title="Welcome",
                message="Assignments and fees are now tracked here.",
            )

        print("\n[3/3] Payments...")
        due = date.today() + timedelta(days=30)
        for student in students:
            if not store.select(Payment, Payment.student_id == student.id):
                store.insert(
                    Payment,
                    student_id=student.id,
                    amount=500,
                    payment_type="tuition",
                    due_date=due,
                    semester="Fall",
                )
        print(f"  pending payments: {len(store.select(Payment))}")

    print("\n" + "=" * 50)
    print(f"Done. Log in with any seeded email and password '{PASSWORD}'.")
    print("=" * 50)


if __name__ == "__main__":
    seed()
