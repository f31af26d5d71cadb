import os
from datetime import date

TEST_DB_FILE = "test_gradebook.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before app modules read their config
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.setdefault("REGISTRATION_URL", "")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.deps import get_db, get_registration_service  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.assignment import Assignment  # noqa: E402
from app.models.assignment_grade import AssignmentGrade  # noqa: E402
from app.models.course import Course  # noqa: E402
from app.models.enrollment import Enrollment  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.registration import RegistrationService  # noqa: E402

PASSWORD = "password123"
INSTRUCTOR = "instructor1@example.com"
OTHER_INSTRUCTOR = "instructor2@example.com"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class RecordingRegistrationService(RegistrationService):
    def __init__(self):
        self.calls = []

    def send_final_grades(self, course_id, grades):
        self.calls.append((course_id, list(grades)))


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed():
    """
    Seed a clean dataset for each test and return the ids.

    CST438 (instructor1) has three students and two assignments, CST363
    (instructor2) has one student and one assignment. No grades exist yet.
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(AssignmentGrade).delete()
        db.query(Assignment).delete()
        db.query(Enrollment).delete()
        db.query(Course).delete()
        db.query(User).delete()
        db.commit()

        db.add_all(
            [
                User(email=INSTRUCTOR, full_name="Instructor One", hashed_password=hash_password(PASSWORD)),
                User(email=OTHER_INSTRUCTOR, full_name="Instructor Two", hashed_password=hash_password(PASSWORD)),
            ]
        )

        course = Course(title="CST438", instructor=INSTRUCTOR)
        other_course = Course(title="CST363", instructor=OTHER_INSTRUCTOR)
        db.add_all([course, other_course])
        db.commit()

        enrollments = [
            Enrollment(course_id=course.id, student_name="Alice", student_email="alice@example.com"),
            Enrollment(course_id=course.id, student_name="Bob", student_email="bob@example.com"),
            Enrollment(course_id=course.id, student_name="Carol", student_email="carol@example.com"),
            Enrollment(course_id=other_course.id, student_name="Dave", student_email="dave@example.com"),
        ]
        db.add_all(enrollments)

        hw1 = Assignment(course_id=course.id, name="HW1", due_date=date(2026, 9, 1))
        hw2 = Assignment(course_id=course.id, name="HW2", due_date=date(2026, 9, 15))
        lab1 = Assignment(course_id=other_course.id, name="Lab1", due_date=date(2026, 9, 8))
        db.add_all([hw1, hw2, lab1])
        db.commit()

        yield {
            "course_id": course.id,
            "other_course_id": other_course.id,
            "hw1_id": hw1.id,
            "hw2_id": hw2.id,
            "lab1_id": lab1.id,
            "enrollment_ids": {e.student_email: e.id for e in enrollments},
        }
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def registration():
    return RecordingRegistrationService()


@pytest.fixture()
def client(registration):
    """Test client that uses the test DB session and a recording registrar."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registration_service] = lambda: registration
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def instructor(client):
    return auth_header(login(client, INSTRUCTOR))


@pytest.fixture()
def other_instructor(client):
    return auth_header(login(client, OTHER_INSTRUCTOR))
