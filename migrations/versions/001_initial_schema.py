"""initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'grade',
        sa.Column('id', sa.Integer(), primary_key=True),
        # Not unique; lookups take the lowest id
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_grade_level', 'grade', ['level'])

    op.create_table(
        'teacher',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(20), nullable=False, unique=True),
        sa.Column('name', sa.String(64), nullable=False),
        sa.Column('surname', sa.String(64), nullable=False),
        sa.Column('email', sa.String(120)),
        sa.Column('phone', sa.String(20)),
        sa.Column('address', sa.String(200)),
        sa.Column('sex', sa.String(10)),
        sa.Column('birthday', sa.Date()),
        sa.Column('created_at', sa.DateTime()),
    )

    op.create_table(
        'subject',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(64), nullable=False, unique=True),
    )

    op.create_table(
        'school_class',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(16), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('grade_id', sa.Integer(), sa.ForeignKey('grade.id'), nullable=False),
        sa.Column('supervisor_id', sa.Integer(), sa.ForeignKey('teacher.id'), nullable=True),
        sa.Column('created_at', sa.DateTime()),
    )

    op.create_table(
        'student',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.String(32), nullable=False, unique=True),
        sa.Column('username', sa.String(32), nullable=False, unique=True),
        sa.Column('name', sa.String(64), nullable=False),
        sa.Column('surname', sa.String(64), nullable=False),
        sa.Column('email', sa.String(120)),
        sa.Column('phone', sa.String(20)),
        sa.Column('address', sa.String(200)),
        sa.Column('sex', sa.String(10), nullable=False),
        sa.Column('birthday', sa.Date(), nullable=False),
        sa.Column('img', sa.String(256)),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('school_class.id'), nullable=False),
        sa.Column('grade_id', sa.Integer(), sa.ForeignKey('grade.id'), nullable=False),
        sa.Column('created_at', sa.DateTime()),
    )

    op.create_table(
        'lesson',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(64), nullable=False),
        sa.Column('day', sa.String(10), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('subject_id', sa.Integer(), sa.ForeignKey('subject.id'), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('school_class.id'), nullable=False),
        sa.Column('teacher_id', sa.Integer(), sa.ForeignKey('teacher.id'), nullable=False),
    )

    op.create_table(
        'announcement',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('school_class.id'), nullable=True),
    )

    op.create_table(
        'event',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('grade_id', sa.Integer(), sa.ForeignKey('grade.id'), nullable=True),
    )

    op.create_table(
        'report',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('student.id'), nullable=False),
        sa.Column('subject_id', sa.Integer(), sa.ForeignKey('subject.id'), nullable=False),
        sa.Column('term', sa.String(10), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('marks', sa.Float(), nullable=False),
        sa.Column('grade', sa.String(4), nullable=False),
        sa.Column('teacher_comment', sa.Text()),
        sa.Column('created_at', sa.DateTime()),
    )

def downgrade():
    # Dependents first
    for table in ('report', 'event', 'announcement', 'lesson', 'student',
                  'school_class', 'subject', 'teacher'):
        op.drop_table(table)
    op.drop_index('ix_grade_level', table_name='grade')
    op.drop_table('grade')
