"""initial_maintenance_schema

Revision ID: a1c0d2e3f4b5
Revises:
Create Date: 2026-10-18 09:00:00.000000

Tables: users, assets, work_requests, work_request_events,
service_reports, service_report_parts, maintenance_records, pm_schedules
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c0d2e3f4b5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='employee'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )

    op.create_table('assets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('asset_code', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('purchase_date', sa.Date(), nullable=False),
        sa.Column('purchase_cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('depreciation_rate', sa.Numeric(5, 2), server_default='10'),
        sa.Column('current_value', sa.Numeric(12, 2), nullable=False),
        sa.Column('health_score', sa.Integer(), server_default='100'),
        sa.Column('status', sa.String(length=30), server_default='operational'),
        sa.Column('last_maintenance_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('next_scheduled_maintenance', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('asset_code'),
    )

    op.create_table('work_requests',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('request_id', sa.String(length=20), nullable=False),
        sa.Column('tswr_no', sa.String(length=30), nullable=False),
        sa.Column('asset_id', sa.Uuid(), nullable=False),
        sa.Column('asset_code', sa.String(length=50), nullable=False),
        sa.Column('asset_name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('work_description', sa.Text(), nullable=False),
        sa.Column('urgency', sa.String(length=30), server_default='standstill'),
        sa.Column('disrupts_operation', sa.Boolean(), server_default=sa.text('false')),
        sa.Column('attachment_url', sa.String(length=1000), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='pending'),
        sa.Column('submitted_by', sa.Uuid(), nullable=False),
        sa.Column('submitted_by_name', sa.String(length=255), nullable=False),
        sa.Column('approved_by', sa.Uuid(), nullable=True),
        sa.Column('approved_by_name', sa.String(length=255), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('denial_reason', sa.Text(), nullable=True),
        sa.Column('scheduled_date', sa.Date(), nullable=True),
        sa.Column('assigned_to', sa.Uuid(), nullable=True),
        sa.Column('assigned_to_name', sa.String(length=255), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cannot_resolve_reason', sa.Text(), nullable=True),
        sa.Column('requester_feedback', sa.Text(), nullable=True),
        sa.Column('requester_confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('closed_by', sa.Uuid(), nullable=True),
        sa.Column('closed_by_name', sa.String(length=255), nullable=True),
        sa.Column('turnaround_time', sa.Integer(), nullable=True),
        sa.Column('service_report_id', sa.Uuid(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['submitted_by'], ['users.id']),
        sa.ForeignKeyConstraint(['approved_by'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assigned_to'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['closed_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('request_id'),
        sa.UniqueConstraint('tswr_no'),
    )
    op.create_index('ix_work_requests_status', 'work_requests', ['status'])
    op.create_index('ix_work_requests_submitted_by', 'work_requests', ['submitted_by'])
    op.create_index('ix_work_requests_assigned_to', 'work_requests', ['assigned_to'])

    op.create_table('work_request_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('work_request_id', sa.Uuid(), nullable=False),
        sa.Column('action', sa.String(length=30), nullable=False),
        sa.Column('from_status', sa.String(length=20), nullable=True),
        sa.Column('to_status', sa.String(length=20), nullable=False),
        sa.Column('actor_id', sa.Uuid(), nullable=True),
        sa.Column('actor_name', sa.String(length=255), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['work_request_id'], ['work_requests.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_work_request_events_request', 'work_request_events', ['work_request_id'])

    op.create_table('service_reports',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('report_id', sa.String(length=20), nullable=False),
        sa.Column('tswr_no', sa.String(length=30), nullable=False),
        sa.Column('work_request_id', sa.Uuid(), nullable=False),
        sa.Column('asset_id', sa.Uuid(), nullable=False),
        sa.Column('asset_code', sa.String(length=50), nullable=False),
        sa.Column('asset_name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('work_description', sa.Text(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('urgency', sa.String(length=30), nullable=False),
        sa.Column('work_start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('work_end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('man_hours', sa.Float(), nullable=False),
        sa.Column('labor_cost', sa.Numeric(12, 2), server_default='0'),
        sa.Column('total_parts_cost', sa.Numeric(12, 2), server_default='0'),
        sa.Column('service_type', sa.String(length=20), nullable=False),
        sa.Column('hours_down', sa.Float(), server_default='0'),
        sa.Column('report_findings', sa.Text(), nullable=False),
        sa.Column('service_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('prepared_by', sa.Uuid(), nullable=False),
        sa.Column('prepared_by_name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['work_request_id'], ['work_requests.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['prepared_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('report_id'),
        sa.UniqueConstraint('work_request_id'),
    )

    op.create_table('service_report_parts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('service_report_id', sa.Uuid(), nullable=False),
        sa.Column('line_no', sa.Integer(), nullable=False),
        sa.Column('part_name', sa.String(length=255), nullable=False),
        sa.Column('part_no', sa.String(length=100), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('cost', sa.Numeric(12, 2), server_default='0'),
        sa.ForeignKeyConstraint(['service_report_id'], ['service_reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('maintenance_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('asset_id', sa.Uuid(), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('technician_name', sa.String(length=255), nullable=False),
        sa.Column('cost', sa.Numeric(12, 2), server_default='0'),
        sa.Column('parts_replaced', sa.JSON(), nullable=True),
        sa.Column('service_report_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['service_report_id'], ['service_reports.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('asset_id', 'sequence', name='uq_maintenance_record_asset_seq'),
    )

    op.create_table('pm_schedules',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('schedule_id', sa.String(length=20), nullable=False),
        sa.Column('asset_id', sa.Uuid(), nullable=False),
        sa.Column('asset_code', sa.String(length=50), nullable=False),
        sa.Column('asset_name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('frequency', sa.String(length=20), nullable=False),
        sa.Column('next_due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_completed_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('assigned_to', sa.Uuid(), nullable=True),
        sa.Column('assigned_to_name', sa.String(length=255), nullable=True),
        sa.Column('tasks', sa.JSON(), nullable=True),
        sa.Column('estimated_duration', sa.Integer(), server_default='60'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true')),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_by', sa.Uuid(), nullable=False),
        sa.Column('created_by_name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['assigned_to'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('schedule_id'),
    )
    op.create_index('ix_pm_schedules_asset_active', 'pm_schedules', ['asset_id', 'is_active'])


def downgrade() -> None:
    op.drop_index('ix_pm_schedules_asset_active', table_name='pm_schedules')
    op.drop_table('pm_schedules')
    op.drop_table('maintenance_records')
    op.drop_table('service_report_parts')
    op.drop_table('service_reports')
    op.drop_index('ix_work_request_events_request', table_name='work_request_events')
    op.drop_table('work_request_events')
    op.drop_index('ix_work_requests_assigned_to', table_name='work_requests')
    op.drop_index('ix_work_requests_submitted_by', table_name='work_requests')
    op.drop_index('ix_work_requests_status', table_name='work_requests')
    op.drop_table('work_requests')
    op.drop_table('assets')
    op.drop_table('users')
