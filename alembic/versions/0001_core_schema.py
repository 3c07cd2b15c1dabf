from alembic import op
import sqlalchemy as sa

revision = '0001_core_schema'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'schools',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('slug', sa.String(80), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_schools_slug', 'schools', ['slug'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
    )
    op.create_index('ix_users_school_id', 'users', ['school_id'])
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'courses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('class_number', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_courses_school_id', 'courses', ['school_id'])
    op.create_index('ix_courses_teacher_id', 'courses', ['teacher_id'])

    op.create_table(
        'course_enrollments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('course_id', sa.Uuid(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('course_id', 'student_id', name='uq_course_student'),
    )
    op.create_index('ix_course_enrollments_school_id', 'course_enrollments', ['school_id'])
    op.create_index('ix_course_enrollments_course_id', 'course_enrollments', ['course_id'])
    op.create_index('ix_course_enrollments_student_id', 'course_enrollments', ['student_id'])

    op.create_table(
        'surveys',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('course_id', sa.Uuid(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_surveys_school_id', 'surveys', ['school_id'])
    op.create_index('ix_surveys_course_id', 'surveys', ['course_id'])

    op.create_table(
        'survey_questions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('survey_id', sa.Uuid(), sa.ForeignKey('surveys.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('question_type', sa.String(20), nullable=False),
        sa.Column('options', sa.JSON(), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_survey_questions_survey_id', 'survey_questions', ['survey_id'])

    op.create_table(
        'survey_responses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('survey_id', sa.Uuid(), sa.ForeignKey('surveys.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question_id', sa.Uuid(), sa.ForeignKey('survey_questions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('response_value', sa.Text(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('survey_id', 'question_id', 'student_id', name='uq_response_once'),
    )
    op.create_index('ix_survey_responses_school_id', 'survey_responses', ['school_id'])
    op.create_index('ix_survey_responses_survey_id', 'survey_responses', ['survey_id'])
    op.create_index('ix_survey_responses_question_id', 'survey_responses', ['question_id'])
    op.create_index('ix_survey_responses_student_id', 'survey_responses', ['student_id'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), nullable=True),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=True),
        sa.Column('ip', sa.String(), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
    )
    op.create_index('ix_audit_logs_school_id', 'audit_logs', ['school_id'])
    op.create_index('ix_audit_logs_user_id', 'audit_logs', ['user_id'])


def downgrade():
    op.drop_table('audit_logs')
    op.drop_table('survey_responses')
    op.drop_table('survey_questions')
    op.drop_table('surveys')
    op.drop_table('course_enrollments')
    op.drop_table('courses')
    op.drop_table('users')
    op.drop_table('schools')
