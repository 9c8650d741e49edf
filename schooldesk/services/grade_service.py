from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from schooldesk import db
from schooldesk.models.grade import Grade
from schooldesk.models.school_class import SchoolClass
from schooldesk.models.student import Student
from schooldesk.models.lesson import Lesson
from schooldesk.models.report import Report
from schooldesk.models.announcement import Announcement
from schooldesk.models.event import Event
from schooldesk.models.exam import Exam
from schooldesk.models.assignment import Assignment
from schooldesk.models.result import Result
from schooldesk.services.errors import SeedVerificationError
from schooldesk.utils.class_names import (
    parse_class_name, grade_label, class_name_for,
    MIN_GRADE_LEVEL, MAX_GRADE_LEVEL, CLASS_SECTIONS,
)


class ReconcileSummary:
    """Outcome of one reconciliation pass over every class"""

    def __init__(self):
        self.checked = 0
        self.unchanged = 0
        self.changes = []
        self.invalid_names = []
        self.missing_grades = []

    @property
    def fixed(self):
        return len(self.changes)

    @property
    def skipped(self):
        return len(self.invalid_names) + len(self.missing_grades)

    def to_dict(self):
        return {
            'checked': self.checked,
            'fixed': self.fixed,
            'unchanged': self.unchanged,
            'skipped': self.skipped,
            'changes': self.changes,
            'invalid_names': self.invalid_names,
            'missing_grades': self.missing_grades,
        }


class SeedSummary:
    def __init__(self, removed, grades, classes):
        self.removed = removed
        self.grades = grades
        self.classes = classes

    def to_dict(self):
        return {
            'removed': self.removed,
            'grades': self.grades,
            'classes': self.classes,
        }


class GradeService:

    @staticmethod
    def find_grade_by_level(level):
        """
        Find the Grade for a level.

        Seeding keeps exactly one Grade per level. If outside edits left
        duplicates, the one with the lowest id wins.
        """
        return Grade.query.filter_by(level=level).order_by(Grade.id.asc()).first()

    @staticmethod
    def resolve_grade_for_class_name(name):
        """Return (level, grade) for a class name; either may be None"""
        level = parse_class_name(name)
        if level is None:
            return None, None
        return level, GradeService.find_grade_by_level(level)

    @staticmethod
    def reconcile_class_grades():
        """
        Point every class at the Grade its name encodes.

        Unparseable names and levels with no Grade are recorded and skipped.
        Each fix is committed on its own; a database error rolls back the
        pending change and propagates, leaving earlier fixes in place.
        """
        summary = ReconcileSummary()
        classes = SchoolClass.query.order_by(SchoolClass.id.asc()).all()
        current_app.logger.info(f"Found {len(classes)} classes to check")

        for cls in classes:
            summary.checked += 1
            class_id, name, old_grade_id = cls.id, cls.name, cls.grade_id

            level = parse_class_name(name)
            if level is None:
                current_app.logger.warning(f"Skipping {name!r} - invalid format")
                summary.invalid_names.append({'class_id': class_id, 'name': name})
                continue

            grade = GradeService.find_grade_by_level(level)
            if grade is None:
                current_app.logger.error(f"Class {name} - grade level {level} not found in database")
                summary.missing_grades.append({'class_id': class_id, 'name': name, 'level': level})
                continue

            if old_grade_id == grade.id:
                current_app.logger.debug(f"{name} already correct (grade_id: {old_grade_id}, level: {level})")
                summary.unchanged += 1
                continue

            try:
                cls.grade_id = grade.id
                db.session.commit()
            except SQLAlchemyError as e:
                db.session.rollback()
                current_app.logger.error(f"Failed to update class {name}: {str(e)}")
                raise

            current_app.logger.info(f"Fixed {name}: grade_id {old_grade_id} -> {grade.id} (level {level})")
            summary.changes.append({
                'class_id': class_id,
                'name': name,
                'old_grade_id': old_grade_id,
                'new_grade_id': grade.id,
                'level': level,
            })

        current_app.logger.info(
            f"Reconciliation done: {summary.checked} checked, {summary.fixed} fixed, {summary.skipped} skipped"
        )
        return summary

    @staticmethod
    def clear_reference_data():
        """Delete students, classes and grades plus the rows that point at them"""
        removed = {}
        removed['reports'] = Report.query.delete(synchronize_session='fetch')
        removed['results'] = Result.query.delete(synchronize_session='fetch')
        removed['exams'] = Exam.query.delete(synchronize_session='fetch')
        removed['assignments'] = Assignment.query.delete(synchronize_session='fetch')
        removed['lessons'] = Lesson.query.delete(synchronize_session='fetch')
        Announcement.query.filter(Announcement.class_id.isnot(None)) \
                          .update({Announcement.class_id: None}, synchronize_session='fetch')
        Event.query.filter(Event.grade_id.isnot(None)) \
                   .update({Event.grade_id: None}, synchronize_session='fetch')
        removed['students'] = Student.query.delete(synchronize_session='fetch')
        removed['classes'] = SchoolClass.query.delete(synchronize_session='fetch')
        removed['grades'] = Grade.query.delete(synchronize_session='fetch')
        return removed

    @staticmethod
    def seed_grades_and_classes(capacity=None):
        """
        Destructively reset grades and classes.

        Removes all students, classes and grades, then creates one Grade per
        level R..12 and classes A-F for each. Everything happens in a single
        transaction that is only committed after the counts check out.
        """
        if capacity is None:
            capacity = current_app.config.get('DEFAULT_CLASS_CAPACITY', 45)

        levels = range(MIN_GRADE_LEVEL, MAX_GRADE_LEVEL + 1)
        expected_grades = len(levels)
        expected_classes = expected_grades * len(CLASS_SECTIONS)

        try:
            removed = GradeService.clear_reference_data()
            current_app.logger.info(f"Cleared existing data: {removed}")

            grades = []
            for level in levels:
                grade = Grade(level=level)
                db.session.add(grade)
                grades.append(grade)
            db.session.flush()  # Assign grade ids

            for grade in grades:
                for letter in CLASS_SECTIONS:
                    db.session.add(SchoolClass(
                        name=class_name_for(grade.level, letter),
                        capacity=capacity,
                        grade_id=grade.id
                    ))
                label = grade_label(grade.level)
                current_app.logger.info(
                    f"Created grade {label} (id {grade.id}) with classes {label}A - {label}F"
                )
            db.session.flush()

            grade_count = Grade.query.count()
            class_count = SchoolClass.query.count()
            if grade_count != expected_grades or class_count != expected_classes:
                raise SeedVerificationError(expected_grades, grade_count, expected_classes, class_count)

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Seeding completed: {grade_count} grades, {class_count} classes")
        return SeedSummary(removed=removed, grades=grade_count, classes=class_count)
