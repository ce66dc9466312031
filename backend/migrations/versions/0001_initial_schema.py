"""initial schema: sites and the six record collections

Revision ID: 0001_initial_schema
Revises:
Create Date: 2024-01-08 00:00:00.000000

Creates the local store:
- sites: ownership scope, one active at a time
- productions, workers, inventory_items, purchases, daily_reports: site-owned records
- settings: display preferences singleton
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'sites',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_sites_name', 'sites', ['name'])
    op.create_index('ix_sites_is_active', 'sites', ['is_active'])

    op.create_table(
        'productions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('quantity_grams', sa.Float(), nullable=False),
        sa.Column('team', sa.String(length=120), nullable=False),
        sa.Column('shift', sa.String(length=16), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_productions_site_id', 'productions', ['site_id'])
    op.create_index('ix_productions_site_date', 'productions', ['site_id', 'date'])
    op.create_index('ix_productions_site_team', 'productions', ['site_id', 'team'])
    op.create_index('ix_productions_site_shift', 'productions', ['site_id', 'shift'])

    op.create_table(
        'workers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=120), nullable=False),
        sa.Column('last_name', sa.String(length=120), nullable=False),
        sa.Column('role', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=64), nullable=False),
        sa.Column('team', sa.String(length=120), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_workers_site_id', 'workers', ['site_id'])
    op.create_index('ix_workers_site_last_name', 'workers', ['site_id', 'last_name'])
    op.create_index('ix_workers_site_first_name', 'workers', ['site_id', 'first_name'])
    op.create_index('ix_workers_site_status', 'workers', ['site_id', 'status'])

    op.create_table(
        'inventory_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=32), nullable=False),
        sa.Column('min_quantity', sa.Float(), nullable=False),
        sa.Column('condition', sa.String(length=16), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_inventory_items_site_id', 'inventory_items', ['site_id'])
    op.create_index('ix_inventory_site_name', 'inventory_items', ['site_id', 'name'])
    op.create_index('ix_inventory_site_category', 'inventory_items', ['site_id', 'category'])

    op.create_table(
        'purchases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=False),
        sa.Column('item', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=8), nullable=False),
        sa.Column('supplier', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('receipt_photo', sa.Text(), nullable=False),
        sa.Column('purchase_date', sa.Date(), nullable=False),
        sa.Column('purchase_time', sa.String(length=5), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_purchases_site_id', 'purchases', ['site_id'])
    op.create_index('ix_purchases_site_date', 'purchases', ['site_id', 'purchase_date'])
    op.create_index('ix_purchases_site_category', 'purchases', ['site_id', 'category'])

    op.create_table(
        'daily_reports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('site_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('incidents', sa.Text(), nullable=False),
        sa.Column('observations', sa.Text(), nullable=False),
        sa.Column('photos', sa.JSON(), nullable=False),
        sa.Column('production_total', sa.Float(), nullable=False),
        sa.Column('workers_present', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_daily_reports_site_id', 'daily_reports', ['site_id'])
    op.create_index('ix_daily_reports_site_date', 'daily_reports', ['site_id', 'date'])

    op.create_table(
        'settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('show_vs_yesterday', sa.Boolean(), nullable=False),
        sa.Column('show_vs_last_week', sa.Boolean(), nullable=False),
        sa.Column('show_working_days', sa.Boolean(), nullable=False),
        sa.Column('show_production_comparison', sa.Boolean(), nullable=False),
        sa.Column('show_purchase_comparison', sa.Boolean(), nullable=False),
        sa.Column('theme', sa.String(length=16), nullable=False),
        sa.Column('language', sa.String(length=8), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )


def downgrade():
    op.drop_table('settings')
    for table in ('daily_reports', 'purchases', 'inventory_items', 'workers', 'productions'):
        op.drop_table(table)
    op.drop_table('sites')
