"""Initial migration - create all tables

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

Creates the TestDesk schema:
- users: credentials and role
- tests: timed papers owned by a creator
- questions: answer key and marking per question
- submissions: one row per scored attempt
- responses: per-question outcome of a submission
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.Text(), nullable=False, unique=True),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('role', sa.Text(), nullable=False, server_default='student'),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("role IN ('student', 'creator')", name='ck_users_role'),
    )

    op.create_table(
        'tests',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('total_marks', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('test_id', sa.Integer(), sa.ForeignKey('tests.id'), nullable=False),
        sa.Column('question_type', sa.Text(), nullable=False, server_default='mcq'),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('options', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('correct_answer', sa.Text(), nullable=False),
        sa.Column('marks', sa.Float(), nullable=False, server_default='1'),
        sa.Column('negative_marks', sa.Float(), nullable=False, server_default='0'),
    )
    op.create_index('ix_questions_test_id', 'questions', ['test_id'])

    op.create_table(
        'submissions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('test_id', sa.Integer(), sa.ForeignKey('tests.id'), nullable=False),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('time_taken_seconds', sa.Integer(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_submissions_test_id', 'submissions', ['test_id'])
    op.create_index('ix_submissions_student_id', 'submissions', ['student_id'])

    op.create_table(
        'responses',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('submission_id', sa.Integer(), sa.ForeignKey('submissions.id'), nullable=False),
        sa.Column('question_id', sa.Integer(), sa.ForeignKey('questions.id'), nullable=False),
        sa.Column('selected_option', sa.Text(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('time_spent_seconds', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_responses_submission_id', 'responses', ['submission_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index('ix_responses_submission_id', table_name='responses')
    op.drop_table('responses')
    op.drop_index('ix_submissions_student_id', table_name='submissions')
    op.drop_index('ix_submissions_test_id', table_name='submissions')
    op.drop_table('submissions')
    op.drop_index('ix_questions_test_id', table_name='questions')
    op.drop_table('questions')
    op.drop_table('tests')
    op.drop_table('users')
