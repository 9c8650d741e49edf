import sys
import click
from flask import current_app
from flask.cli import with_appcontext
from schooldesk.models.school_class import SchoolClass
from schooldesk.models.grade import Grade
from schooldesk.services.grade_service import GradeService
from schooldesk.utils.class_names import grade_label


def run_seed(echo=print):
    """Reset grades and classes, print what was created. Returns True on success."""
    echo('🌱 Starting database seeding...')
    echo(f'📊 Current database state: {Grade.query.count()} grades, {SchoolClass.query.count()} classes')

    try:
        summary = GradeService.seed_grades_and_classes()
    except Exception as e:
        current_app.logger.error(f'Error seeding database: {str(e)}')
        echo(f'❌ Error seeding database: {e}')
        return False

    echo('🎉 Seeding completed successfully!')
    echo(f'   - Removed: {summary.removed}')
    echo(f'   - Total grades: {summary.grades}')
    echo(f'   - Classes created: {summary.classes}')

    classes = SchoolClass.query.join(Grade) \
                               .order_by(Grade.level.asc(), SchoolClass.name.asc()) \
                               .all()
    echo('Class Name | Grade Level | Grade ID | Class ID')
    echo('-----------|-------------|----------|----------')
    for cls in classes:
        echo(f'{cls.name:<10} | {grade_label(cls.grade.level):<11} | {cls.grade.id:<8} | {cls.id}')
    return True


def run_fix_class_grades(echo=print):
    """Reconcile class grade references, print a summary. Returns True on success."""
    echo(f'📊 Found {SchoolClass.query.count()} classes to check')

    try:
        summary = GradeService.reconcile_class_grades()
    except Exception as e:
        current_app.logger.error(f'Error reconciling class grades: {str(e)}')
        echo(f'❌ Error: {e}')
        return False

    for change in summary.changes:
        echo(f"🔧 Fixed {change['name']}: grade_id {change['old_grade_id']} -> "
             f"{change['new_grade_id']} (level {change['level']})")
    for item in summary.invalid_names:
        echo(f"⚠️ Skipped {item['name']!r} - invalid format")
    for item in summary.missing_grades:
        echo(f"❌ Class {item['name']} - grade level {item['level']} not found in database!")

    echo(f'🎉 Done! {summary.checked} checked, {summary.fixed} fixed, '
         f'{summary.unchanged} already correct, {summary.skipped} skipped')
    return True


@click.command('seed-db')
@with_appcontext
def seed_db_command():
    """Delete students, classes and grades and recreate grades R-12 with classes A-F."""
    if not run_seed(click.echo):
        sys.exit(1)


@click.command('fix-class-grades')
@with_appcontext
def fix_class_grades_command():
    """Point every class at the grade its name encodes (e.g. 2D -> grade 2)."""
    if not run_fix_class_grades(click.echo):
        sys.exit(1)


def register_commands(app):
    app.cli.add_command(seed_db_command)
    app.cli.add_command(fix_class_grades_command)
