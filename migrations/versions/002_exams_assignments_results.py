"""exams, assignments and results

Revision ID: 002_exams_assignments_results
Revises: 001_initial_schema
Create Date: 2026-10-18 15:30:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_exams_assignments_results'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'exam',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('lesson_id', sa.Integer(), sa.ForeignKey('lesson.id'), nullable=False),
    )

    op.create_table(
        'assignment',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=False),
        sa.Column('lesson_id', sa.Integer(), sa.ForeignKey('lesson.id'), nullable=False),
    )

    op.create_table(
        'result',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('score', sa.Float(), nullable=False),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('student.id'), nullable=False),
        sa.Column('exam_id', sa.Integer(), sa.ForeignKey('exam.id'), nullable=True),
        sa.Column('assignment_id', sa.Integer(), sa.ForeignKey('assignment.id'), nullable=True),
    )

def downgrade():
    op.drop_table('result')
    op.drop_table('assignment')
    op.drop_table('exam')
