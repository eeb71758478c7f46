# tests/conftest.py

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import TeacherAssignment, User
from core.models import AcademicYear, Classroom, Subject
from enrollments.models import Enrollment, Student
from exams.models import Exam, ExamSchedule, Mark
from grading import services as grading_services

EXAMPLE_BANDS = [
    {"grade_name": "F", "min_percentage": 0, "max_percentage": 39, "points": 0},
    {"grade_name": "C", "min_percentage": 40, "max_percentage": 59, "points": 2},
    {"grade_name": "B", "min_percentage": 60, "max_percentage": 79, "points": 3},
    {"grade_name": "A", "min_percentage": 80, "max_percentage": 100, "points": 4},
]

EXAMPLE_BANDS_PAYLOAD = [
    {"gradeName": "A", "minPercentage": 80, "maxPercentage": 100, "points": 4},
    {"gradeName": "B", "minPercentage": 60, "maxPercentage": 79, "points": 3},
    {"gradeName": "C", "minPercentage": 40, "maxPercentage": 59, "points": 2},
    {"gradeName": "F", "minPercentage": 0, "maxPercentage": 39, "points": 0},
]


@pytest.fixture
def example_bands():
    return [dict(b) for b in EXAMPLE_BANDS]


@pytest.fixture
def bands_payload():
    return [dict(b) for b in EXAMPLE_BANDS_PAYLOAD]


@pytest.fixture
def default_system(db, example_bands):
    return grading_services.create_grading_system("Standard A-F", example_bands, is_default=True)


# --- users ---


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username="admin", password="pass", role=User.Role.ADMIN)


@pytest.fixture
def teacher_user(db, classroom):
    user = User.objects.create_user(username="teacher", password="pass", role=User.Role.TEACHER)
    TeacherAssignment.objects.create(teacher=user, classroom=classroom, can_edit=True)
    return user


@pytest.fixture
def readonly_teacher_user(db, classroom):
    user = User.objects.create_user(username="reader", password="pass", role=User.Role.TEACHER)
    TeacherAssignment.objects.create(teacher=user, classroom=classroom, can_edit=False)
    return user


@pytest.fixture
def outsider_teacher_user(db):
    return User.objects.create_user(username="outsider", password="pass", role=User.Role.TEACHER)


@pytest.fixture
def student_user(db):
    return User.objects.create_user(username="pupil", password="pass", role=User.Role.STUDENT)


def _client(user=None):
    client = APIClient()
    if user is not None:
        client.force_authenticate(user=user)
    return client


@pytest.fixture
def api_client():
    return _client()


@pytest.fixture
def admin_client(admin_user):
    return _client(admin_user)


@pytest.fixture
def teacher_client(teacher_user):
    return _client(teacher_user)


@pytest.fixture
def readonly_teacher_client(readonly_teacher_user):
    return _client(readonly_teacher_user)


@pytest.fixture
def outsider_client(outsider_teacher_user):
    return _client(outsider_teacher_user)


@pytest.fixture
def student_client(student_user):
    return _client(student_user)


# --- school data ---


@pytest.fixture
def year(db):
    return AcademicYear.objects.create(name="2025/2026", is_current=True)


@pytest.fixture
def classroom(year):
    return Classroom.objects.create(year=year, name="Form 2", section="B")


@pytest.fixture
def math(db):
    return Subject.objects.create(code="MATH", name="Mathematics")


@pytest.fixture
def english(db):
    return Subject.objects.create(code="ENG", name="English")


@pytest.fixture
def enrollments(classroom):
    rows = [("S001", "Abena", "Kofi"), ("S002", "Bello", "Ada"), ("S003", "Chan", "Lee")]
    result = []
    for i, (matricule, last, first) in enumerate(rows, start=1):
        student = Student.objects.create(matricule=matricule, last_name=last, first_name=first)
        result.append(Enrollment.objects.create(student=student, classroom=classroom, roll_number=i))
    return result


@pytest.fixture
def exam(year):
    return Exam.objects.create(name="First Terminal", year=year)


@pytest.fixture
def math_schedule(exam, classroom, math):
    return ExamSchedule.objects.create(exam=exam, classroom=classroom, subject=math, full_marks=100)


@pytest.fixture
def english_schedule(exam, classroom, english):
    return ExamSchedule.objects.create(exam=exam, classroom=classroom, subject=english, full_marks=50)


@pytest.fixture
def schedules(math_schedule, english_schedule):
    return [math_schedule, english_schedule]


@pytest.fixture
def record_mark():
    def _record(enrollment, schedule, value):
        return Mark.objects.create(enrollment=enrollment, schedule=schedule, marks_obtained=Decimal(str(value)))
    return _record


@pytest.fixture
def full_marks(enrollments, schedules, record_mark):
    """
    Toutes les notes de l'examen:
      S001: 90/100, 45/50  -> A, A  (90%)
      S002: 50/100, 30/50  -> C, B  (55%)
      S003: 90/100, 45/50  -> A, A  (90%, ex aequo avec S001)
    """
    math_schedule, english_schedule = schedules
    values = [(90, 45), (50, 30), (90, 45)]
    for enrollment, (m, e) in zip(enrollments, values):
        record_mark(enrollment, math_schedule, m)
        record_mark(enrollment, english_schedule, e)
