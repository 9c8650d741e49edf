from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from schooldesk import db
from schooldesk.models import (
    Grade, SchoolClass, Student, Lesson, Announcement, Event, Report,
    Exam, Assignment, Result,
)
from schooldesk.services import grade_service
from schooldesk.services.errors import SeedVerificationError
from schooldesk.services.grade_service import GradeService
from schooldesk.utils.class_names import parse_class_name


def test_seed_from_empty_creates_grades_and_classes(app_ctx):
    summary = GradeService.seed_grades_and_classes()

    assert summary.grades == 13
    assert summary.classes == 78
    assert [g.level for g in Grade.query.order_by(Grade.level).all()] == list(range(13))
    assert SchoolClass.query.count() == 78

    for cls in SchoolClass.query.all():
        assert parse_class_name(cls.name) == cls.grade.level
        assert cls.capacity == 45

    names = {cls.name for cls in SchoolClass.query.all()}
    assert {'RA', 'RF', '1A', '9C', '12F'} <= names


def test_seed_uses_given_capacity(app_ctx):
    GradeService.seed_grades_and_classes(capacity=30)
    assert {cls.capacity for cls in SchoolClass.query.all()} == {30}


def test_reseed_gives_same_counts_and_discards_students(app_ctx, factory):
    GradeService.seed_grades_and_classes()
    cls = SchoolClass.query.filter_by(name='3B').one()
    factory.student(cls)

    summary = GradeService.seed_grades_and_classes()

    assert summary.removed['students'] == 1
    assert summary.removed['classes'] == 78
    assert summary.removed['grades'] == 13
    assert Grade.query.count() == 13
    assert SchoolClass.query.count() == 78
    assert Student.query.count() == 0


def test_seed_clears_records_that_point_at_classes_and_grades(app_ctx, factory):
    grade = factory.grade(4)
    cls = factory.school_class('4A', grade)
    teacher = factory.teacher()
    maths = factory.subject('Mathematics')
    student = factory.student(cls)
    lesson = factory.lesson(maths, cls, teacher)
    factory.report(student, maths)
    factory.result(student, 60, exam=factory.exam('Algebra test', lesson))
    factory.result(student, 75, assignment=factory.assignment('Fractions worksheet', lesson))
    notice = factory.announcement('Sports day', datetime(2026, 3, 1), cls)
    trip = factory.event('Zoo trip', datetime(2026, 4, 1, 9), datetime(2026, 4, 1, 15), grade)
    notice_id, trip_id = notice.id, trip.id

    GradeService.seed_grades_and_classes()
    db.session.expire_all()

    assert Report.query.count() == 0
    assert Result.query.count() == 0
    assert Exam.query.count() == 0
    assert Assignment.query.count() == 0
    assert Lesson.query.count() == 0
    assert Student.query.count() == 0
    assert db.session.get(Announcement, notice_id).class_id is None
    assert db.session.get(Event, trip_id).grade_id is None


def test_seed_verification_failure_rolls_back(app_ctx, factory, monkeypatch):
    grade = factory.grade(5)
    factory.school_class('5A', grade)
    # Leave the old rows in place so the counts come out wrong
    monkeypatch.setattr(GradeService, 'clear_reference_data', staticmethod(lambda: {}))

    with pytest.raises(SeedVerificationError) as excinfo:
        GradeService.seed_grades_and_classes()

    assert excinfo.value.expected_grades == 13
    assert excinfo.value.actual_grades == 14
    assert Grade.query.count() == 1
    assert SchoolClass.query.count() == 1


def test_seed_failure_midway_leaves_previous_data(app_ctx, monkeypatch):
    GradeService.seed_grades_and_classes()

    def broken_name(level, section):
        raise RuntimeError('boom')

    monkeypatch.setattr(grade_service, 'class_name_for', broken_name)

    with pytest.raises(RuntimeError):
        GradeService.seed_grades_and_classes()

    assert Grade.query.count() == 13
    assert SchoolClass.query.count() == 78


def test_find_grade_by_level(app_ctx, factory):
    factory.grade(2)
    assert GradeService.find_grade_by_level(2).level == 2
    assert GradeService.find_grade_by_level(13) is None


def test_find_grade_by_level_picks_lowest_id_on_duplicates(app_ctx, factory):
    first = factory.grade(6)
    factory.grade(6)
    assert GradeService.find_grade_by_level(6).id == first.id


def test_reconcile_after_seed_changes_nothing(app_ctx):
    GradeService.seed_grades_and_classes()

    summary = GradeService.reconcile_class_grades()

    assert summary.checked == 78
    assert summary.fixed == 0
    assert summary.unchanged == 78
    assert summary.skipped == 0


def test_reconcile_fixes_class_pointing_at_wrong_grade(app_ctx, factory):
    grade2 = factory.grade(2)
    grade3 = factory.grade(3)
    cls = factory.school_class('2D', grade3)

    summary = GradeService.reconcile_class_grades()

    assert summary.fixed == 1
    assert summary.changes == [{
        'class_id': cls.id,
        'name': '2D',
        'old_grade_id': grade3.id,
        'new_grade_id': grade2.id,
        'level': 2,
    }]
    db.session.expire_all()
    assert db.session.get(SchoolClass, cls.id).grade.level == 2


def test_reconcile_is_idempotent(app_ctx, factory):
    grade_r = factory.grade(0)
    grade1 = factory.grade(1)
    factory.school_class('RA', grade1)
    factory.school_class('1a', grade_r)

    first = GradeService.reconcile_class_grades()
    second = GradeService.reconcile_class_grades()

    assert first.fixed == 2
    assert second.fixed == 0
    assert second.unchanged == 2


def test_reconcile_skips_invalid_names_without_touching_them(app_ctx, factory):
    grade7 = factory.grade(7)
    grade8 = factory.grade(8)
    bad = factory.school_class('7Z', grade8)
    fixable = factory.school_class('7A', grade8)

    summary = GradeService.reconcile_class_grades()

    assert summary.checked == 2
    assert summary.skipped == 1
    assert summary.invalid_names == [{'class_id': bad.id, 'name': '7Z'}]
    assert summary.fixed == 1
    db.session.expire_all()
    assert db.session.get(SchoolClass, bad.id).grade_id == grade8.id
    assert db.session.get(SchoolClass, fixable.id).grade_id == grade7.id


def test_reconcile_skips_names_with_non_ascii_digits(app_ctx, factory):
    factory.grade(2)
    grade3 = factory.grade(3)
    cls = factory.school_class('２D', grade3)

    summary = GradeService.reconcile_class_grades()

    assert summary.fixed == 0
    assert summary.invalid_names == [{'class_id': cls.id, 'name': '２D'}]
    assert db.session.get(SchoolClass, cls.id).grade_id == grade3.id


def test_reconcile_reports_missing_grade(app_ctx, factory):
    grade12 = factory.grade(12)
    cls = factory.school_class('13A', grade12)

    summary = GradeService.reconcile_class_grades()

    assert summary.missing_grades == [{'class_id': cls.id, 'name': '13A', 'level': 13}]
    assert summary.skipped == 1
    assert summary.fixed == 0
    assert db.session.get(SchoolClass, cls.id).grade_id == grade12.id


def test_reconcile_summary_to_dict(app_ctx, factory):
    grade = factory.grade(1)
    factory.school_class('1A', grade)

    data = GradeService.reconcile_class_grades().to_dict()

    assert data['checked'] == 1
    assert data['fixed'] == 0
    assert data['skipped'] == 0
    assert data['changes'] == []


def test_reconcile_database_error_aborts_batch(app_ctx, factory, monkeypatch):
    grade1 = factory.grade(1)
    grade2 = factory.grade(2)
    factory.school_class('1A', grade2)
    factory.school_class('2A', grade1)

    calls = []

    def failing_commit():
        calls.append(1)
        raise OperationalError('UPDATE school_class', {}, Exception('connection lost'))

    monkeypatch.setattr(db.session, 'commit', failing_commit)

    with pytest.raises(OperationalError):
        GradeService.reconcile_class_grades()

    # Stopped at the first failed update
    assert len(calls) == 1
