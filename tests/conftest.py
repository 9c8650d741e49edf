from datetime import date, datetime, timedelta

import pytest

from config import TestingConfig
from schooldesk import create_app, db
from schooldesk.models import (
    Grade, SchoolClass, Student, Teacher, Subject, Lesson, Announcement, Event, Report,
    Exam, Assignment, Result,
)
from schooldesk.services.grade_service import GradeService


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def seeded(app):
    with app.app_context():
        GradeService.seed_grades_and_classes()
    return app


class Factory:
    """Creates committed records in the current app context"""

    def __init__(self):
        self._counter = 0

    def _next(self):
        self._counter += 1
        return self._counter

    def _save(self, obj):
        db.session.add(obj)
        db.session.commit()
        return obj

    def grade(self, level):
        return self._save(Grade(level=level))

    def school_class(self, name, grade, capacity=45, supervisor=None):
        return self._save(SchoolClass(
            name=name, capacity=capacity, grade_id=grade.id,
            supervisor_id=supervisor.id if supervisor else None,
        ))

    def teacher(self, name='Thandi', surname='Mokoena'):
        n = self._next()
        return self._save(Teacher(username=f'teacher{n}', name=name, surname=surname))

    def subject(self, name):
        return self._save(Subject(name=name))

    def student(self, school_class, name='Sipho', surname='Dlamini', sex='MALE', code=None):
        n = self._next()
        return self._save(Student(
            student_id=code or f'STU{n:04d}',
            username=f'student{n}',
            name=name,
            surname=surname,
            sex=sex,
            birthday=date(2015, 3, 1),
            class_id=school_class.id,
            grade_id=school_class.grade_id,
        ))

    def lesson(self, subject, school_class, teacher, day='MONDAY'):
        return self._save(Lesson(
            name=f'{subject.name} {school_class.name}',
            day=day,
            start_time=datetime(2026, 1, 5, 8, 0),
            end_time=datetime(2026, 1, 5, 9, 0),
            subject_id=subject.id,
            class_id=school_class.id,
            teacher_id=teacher.id,
        ))

    def announcement(self, title, when, school_class=None):
        return self._save(Announcement(
            title=title, description=f'{title} details', date=when,
            class_id=school_class.id if school_class else None,
        ))

    def event(self, title, start, end, grade=None):
        return self._save(Event(
            title=title, start_time=start, end_time=end,
            grade_id=grade.id if grade else None,
        ))

    def report(self, student, subject, term='TERM1', year=2025, marks=72.5, grade='B'):
        return self._save(Report(
            student_id=student.id, subject_id=subject.id, term=term,
            year=year, marks=marks, grade=grade,
        ))

    def exam(self, title, lesson, start=datetime(2026, 6, 2, 9, 0)):
        return self._save(Exam(
            title=title, start_time=start, end_time=start + timedelta(hours=2),
            lesson_id=lesson.id,
        ))

    def assignment(self, title, lesson, start=datetime(2026, 5, 4, 8, 0)):
        return self._save(Assignment(
            title=title, start_date=start, due_date=start + timedelta(days=7),
            lesson_id=lesson.id,
        ))

    def result(self, student, score, exam=None, assignment=None):
        return self._save(Result(
            student_id=student.id, score=score,
            exam_id=exam.id if exam else None,
            assignment_id=assignment.id if assignment else None,
        ))


@pytest.fixture
def factory():
    return Factory()
