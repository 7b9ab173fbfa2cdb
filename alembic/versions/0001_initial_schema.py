"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LIVE = sa.text("is_deleted = false")


def base_columns():
    """id, timestamps and soft-delete columns shared by every table"""
    return [
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def create_table(name, *columns):
    op.create_table(name, *base_columns(), *columns)
    op.create_index(f'ix_{name}_created_at', name, ['created_at'])
    op.create_index(f'ix_{name}_is_deleted', name, ['is_deleted'])


def live_unique(name, table, columns):
    op.create_index(name, table, columns, unique=True, postgresql_where=LIVE)


def upgrade() -> None:
    create_table(
        'parents',
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False, index=True),
        sa.Column('relationship_to_student', sa.String(20)),
        sa.Column('contact_number', sa.String(20)),
        sa.Column('email', sa.String(100), index=True),
        sa.Column('occupation', sa.String(100)),
        sa.Column('notes', sa.Text()),
    )
    create_table(
        'emergency_contacts',
        sa.Column('parent_id', sa.Uuid(), sa.ForeignKey('parents.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('relationship', sa.String(50)),
        sa.Column('phone_number', sa.String(20), nullable=False),
        sa.Column('email', sa.String(100)),
    )
    create_table(
        'students',
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False, index=True),
        sa.Column('dob', sa.Date()),
        sa.Column('gender', sa.String(10)),
        sa.Column('contact_number', sa.String(20)),
        sa.Column('email', sa.String(100), index=True),
        sa.Column('enrollment_date', sa.Date()),
        sa.Column('grade', sa.String(20)),
        sa.Column('previous_school', sa.String(200)),
        sa.Column('academic_year', sa.String(20)),
        sa.Column('additional_notes', sa.Text()),
        sa.Column('parent_id', sa.Uuid(), sa.ForeignKey('parents.id', ondelete='SET NULL'), index=True),
    )
    create_table(
        'teachers',
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False, index=True),
        sa.Column('dob', sa.Date()),
        sa.Column('gender', sa.String(10)),
        sa.Column('contact_number', sa.String(20)),
        sa.Column('email', sa.String(100), index=True),
        sa.Column('hire_date', sa.Date()),
        sa.Column('salary', sa.Numeric(10, 2)),
        sa.Column('title', sa.String(20)),
        sa.Column('employment_type', sa.String(20)),
    )
    create_table(
        'users',
        sa.Column('username', sa.String(50), nullable=False, index=True),
        sa.Column('email', sa.String(100), index=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(50)),
        sa.Column('last_name', sa.String(50)),
        sa.Column('photo_url', sa.String(500)),
        sa.Column('role', sa.String(20), nullable=False, index=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id', ondelete='SET NULL'), index=True),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('teachers.id', ondelete='SET NULL'), index=True),
        sa.Column('parent_id', sa.Uuid(), sa.ForeignKey('parents.id', ondelete='SET NULL'), index=True),
    )
    live_unique('uq_users_username_live', 'users', ['username'])
    live_unique('uq_users_email_live', 'users', ['email'])

    create_table(
        'addresses',
        sa.Column('address', sa.String(255), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(100)),
        sa.Column('zip_code', sa.String(20)),
        sa.Column('country', sa.String(100)),
    )
    for owner, owners in (('student', 'students'), ('parent', 'parents'), ('teacher', 'teachers')):
        table = f'{owner}_addresses'
        create_table(
            table,
            sa.Column(f'{owner}_id', sa.Uuid(), sa.ForeignKey(f'{owners}.id', ondelete='CASCADE'), nullable=False, index=True),
            sa.Column('address_id', sa.Uuid(), sa.ForeignKey('addresses.id', ondelete='CASCADE'), nullable=False, index=True),
            sa.Column('address_type', sa.String(20), nullable=False, server_default='HOME'),
        )
        live_unique(f'uq_{owner}_address', table, [f'{owner}_id', 'address_id'])

    create_table(
        'departments',
        sa.Column('name', sa.String(100), nullable=False, index=True),
        sa.Column('code', sa.String(20), nullable=False, index=True),
        sa.Column('description', sa.Text()),
        sa.Column('location', sa.String(100)),
        sa.Column('email', sa.String(100)),
        sa.Column('phone_number', sa.String(20)),
        sa.Column('head_id', sa.Uuid(), sa.ForeignKey('teachers.id', ondelete='SET NULL')),
    )
    live_unique('uq_departments_name_live', 'departments', ['name'])
    live_unique('uq_departments_code_live', 'departments', ['code'])

    op.create_table(
        'teacher_departments',
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('department_id', sa.Uuid(), sa.ForeignKey('departments.id', ondelete='CASCADE'), primary_key=True),
    )

    create_table(
        'courses',
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('code', sa.String(20), nullable=False, unique=True),
        sa.Column('description', sa.Text()),
        sa.Column('department_id', sa.Uuid(), sa.ForeignKey('departments.id'), nullable=False, index=True),
        sa.Column('credits', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('level', sa.Integer()),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('max_students', sa.Integer()),
    )
    create_table(
        'course_prerequisites',
        sa.Column('course_id', sa.Uuid(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('prerequisite_id', sa.Uuid(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('min_grade', sa.String(10)),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text()),
        sa.UniqueConstraint('course_id', 'prerequisite_id', name='uq_course_prerequisite'),
    )

    create_table(
        'rooms',
        sa.Column('room_number', sa.String(20), nullable=False, unique=True),
        sa.Column('building', sa.String(100)),
        sa.Column('name', sa.String(100)),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('room_type', sa.String(20), nullable=False, server_default='CLASS_ROOM'),
        sa.Column('has_projector', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_whiteboard', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('notes', sa.Text()),
    )
    create_table(
        'semesters',
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False, index=True),
        sa.Column('end_date', sa.Date(), nullable=False, index=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='UPCOMING'),
        sa.Column('current_semester', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('academic_year', sa.String(20)),
        sa.Column('description', sa.Text()),
    )
    live_unique('uq_semesters_name_live', 'semesters', ['name'])

    create_table(
        'classes',
        sa.Column('course_id', sa.Uuid(), sa.ForeignKey('courses.id', ondelete='SET NULL'), index=True),
        sa.Column('semester_id', sa.Uuid(), sa.ForeignKey('semesters.id'), nullable=False, index=True),
        sa.Column('room_id', sa.Uuid(), sa.ForeignKey('rooms.id', ondelete='SET NULL'), index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('grade_level', sa.String(20)),
        sa.Column('section', sa.String(10)),
        sa.Column('description', sa.Text()),
        sa.Column('max_enrollment', sa.Integer(), nullable=False, server_default='30'),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('day_of_week', sa.String(10)),
        sa.Column('start_time', sa.Time()),
        sa.Column('end_time', sa.Time()),
        sa.Column('start_date', sa.Date()),
        sa.Column('end_date', sa.Date()),
    )
    create_table(
        'class_assignments',
        sa.Column('class_id', sa.Uuid(), sa.ForeignKey('classes.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('start_date', sa.Date()),
        sa.Column('end_date', sa.Date()),
        sa.UniqueConstraint('class_id', 'teacher_id', name='uq_class_assignment'),
    )

    create_table(
        'enrollments',
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('class_id', sa.Uuid(), sa.ForeignKey('classes.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('enrollment_date', sa.Date(), nullable=False, index=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE', index=True),
        sa.Column('status_history', sa.JSON(), nullable=False),
        sa.Column('grade', sa.String(10)),
        sa.Column('notes', sa.Text()),
        sa.Column('completion_date', sa.Date()),
        sa.UniqueConstraint('student_id', 'class_id', name='uq_enrollment_student_class'),
    )
    create_table(
        'attendances',
        sa.Column('enrollment_id', sa.Uuid(), sa.ForeignKey('enrollments.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('attendance_date', sa.Date(), nullable=False, index=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text()),
    )
    create_table(
        'grades',
        sa.Column('enrollment_id', sa.Uuid(), sa.ForeignKey('enrollments.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('assignment_name', sa.String(100), nullable=False),
        sa.Column('score', sa.Numeric(5, 2), nullable=False),
        sa.Column('grade_date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(50)),
        sa.Column('weighting', sa.Numeric(5, 2), nullable=False, server_default='1'),
    )


def downgrade() -> None:
    for table in (
        'grades', 'attendances', 'enrollments', 'class_assignments', 'classes',
        'semesters', 'rooms', 'course_prerequisites', 'courses', 'teacher_departments',
        'departments', 'teacher_addresses', 'parent_addresses', 'student_addresses',
        'addresses', 'users', 'teachers', 'students', 'emergency_contacts', 'parents',
    ):
        op.drop_table(table)
