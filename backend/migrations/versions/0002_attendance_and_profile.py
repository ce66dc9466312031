"""attendance records and the local user profile

Revision ID: 0002_attendance_and_profile
Revises: 0001_initial_schema
Create Date: 2024-02-12 00:00:00.000000

Moves two pieces of state into the store:
- attendance_records: daily check-in/check-out, site-owned (part of the site cascade)
- user_profiles: the single local profile
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0002_attendance_and_profile'
down_revision = '0001_initial_schema'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'attendance_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=False),
        sa.Column('worker_id', sa.Integer(), nullable=False),
        sa.Column('worker_name', sa.String(length=255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('check_in', sa.String(length=5), nullable=False),
        sa.Column('check_out', sa.String(length=5), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_attendance_records_site_id', 'attendance_records', ['site_id'])
    op.create_index('ix_attendance_site_date', 'attendance_records', ['site_id', 'date'])
    op.create_index('ix_attendance_site_worker_date', 'attendance_records', ['site_id', 'worker_id', 'date'])

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=120), nullable=False),
        sa.Column('last_name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=64), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('avatar', sa.Text(), nullable=True),
        sa.Column('site_id', sa.Integer(), nullable=True),
        sa.Column('team', sa.String(length=120), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )


def downgrade():
    op.drop_table('user_profiles')
    op.drop_table('attendance_records')
