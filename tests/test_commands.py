from config import TestingConfig
from schooldesk import db
from schooldesk.models import Grade, SchoolClass
from schooldesk.services.grade_service import GradeService

import fix_class_grades
import seed


def test_seed_db_command(app, runner):
    result = runner.invoke(args=['seed-db'])

    assert result.exit_code == 0, result.output
    assert 'Seeding completed successfully' in result.output
    assert 'Total grades: 13' in result.output
    assert 'Classes created: 78' in result.output
    assert 'RA ' in result.output
    with app.app_context():
        assert Grade.query.count() == 13
        assert SchoolClass.query.count() == 78


def test_seed_db_command_twice_keeps_counts(app, runner):
    assert runner.invoke(args=['seed-db']).exit_code == 0
    assert runner.invoke(args=['seed-db']).exit_code == 0
    with app.app_context():
        assert Grade.query.count() == 13
        assert SchoolClass.query.count() == 78


def test_seed_db_command_failure_exits_non_zero(runner, monkeypatch):
    def broken(capacity=None):
        raise RuntimeError('database went away')

    monkeypatch.setattr(GradeService, 'seed_grades_and_classes', staticmethod(broken))

    result = runner.invoke(args=['seed-db'])

    assert result.exit_code == 1
    assert 'database went away' in result.output


def test_fix_class_grades_command_on_clean_data(seeded, runner):
    result = runner.invoke(args=['fix-class-grades'])

    assert result.exit_code == 0, result.output
    assert '78 checked, 0 fixed, 78 already correct, 0 skipped' in result.output


def test_fix_class_grades_command_reports_fixes_and_skips(app, runner, factory):
    with app.app_context():
        grade2 = factory.grade(2)
        grade3 = factory.grade(3)
        factory.school_class('2D', grade3)
        factory.school_class('7Z', grade3)
        factory.school_class('13A', grade3)
        grade2_id, grade3_id = grade2.id, grade3.id

    result = runner.invoke(args=['fix-class-grades'])

    assert result.exit_code == 0, result.output
    assert f'Fixed 2D: grade_id {grade3_id} -> {grade2_id} (level 2)' in result.output
    assert "Skipped '7Z' - invalid format" in result.output
    assert 'Class 13A - grade level 13 not found' in result.output
    assert '3 checked, 1 fixed, 0 already correct, 2 skipped' in result.output

    second = runner.invoke(args=['fix-class-grades'])
    assert '1 already correct' in second.output
    assert '0 fixed' in second.output


def test_seed_script_main(capsys):
    assert seed.main(TestingConfig) is True
    out = capsys.readouterr().out
    assert 'Seeding Grades and Classes' in out
    assert 'Classes created: 78' in out
    assert 'Database connection closed' in out


def test_fix_class_grades_script_main(capsys):
    assert fix_class_grades.main(TestingConfig) is True
    out = capsys.readouterr().out
    assert '0 checked, 0 fixed' in out


def test_fix_class_grades_script_main_reports_failure(monkeypatch, capsys):
    def broken():
        raise RuntimeError('connection lost')

    monkeypatch.setattr(GradeService, 'reconcile_class_grades', staticmethod(broken))

    assert fix_class_grades.main(TestingConfig) is False
    assert 'connection lost' in capsys.readouterr().out
