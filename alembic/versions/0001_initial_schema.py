"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated=True):
    columns = [sa.Column('created_at', sa.DateTime(), nullable=True)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(), nullable=True))
    return columns


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'equipment',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('group_name', sa.String(length=255), nullable=True),
        sa.Column('brand', sa.String(length=255), nullable=True),
        sa.Column('type', sa.String(length=100), nullable=True),
        sa.Column('model', sa.String(length=255), nullable=True),
        sa.Column('serial_number', sa.String(length=255), nullable=True),
        sa.Column('manufacturer', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=True),
        sa.Column('purchase_price', sa.Float(), nullable=True),
        sa.Column('paid_amount', sa.Float(), nullable=True),
        sa.Column('remaining_amount', sa.Float(), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('installation_date', sa.Date(), nullable=True),
        sa.Column('expected_lifecycle', sa.Integer(), nullable=True),
        sa.Column('payment_history', sa.JSON(), nullable=True),
        sa.Column('has_warranty', sa.Boolean(), nullable=True),
        sa.Column('warranty_duration_days', sa.Integer(), nullable=True),
        sa.Column('warranty_expiry_date', sa.Date(), nullable=True),
        sa.Column('supplier_id', sa.String(length=36), nullable=True),
        sa.Column('supplier_name', sa.String(length=255), nullable=True),
        sa.Column('contractor_ids', sa.JSON(), nullable=True),
        sa.Column('status', sa.Enum('OPERATIONAL', 'UNDER_MAINTENANCE', 'DOWN', 'SCRAPPED', name='equipmentstatus'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('license_required', sa.Boolean(), nullable=True),
        sa.Column('license_info', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_equipment_name', 'equipment', ['name'])
    op.create_index('ix_equipment_group_name', 'equipment', ['group_name'])
    op.create_index('ix_equipment_serial_number', 'equipment', ['serial_number'])

    op.create_table(
        'service_logs',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('equipment_id', sa.String(length=36), nullable=False),
        sa.Column('equipment_name', sa.String(length=255), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('type', sa.Enum('PREVENTIVE', 'CORRECTIVE', 'CALIBRATION', name='servicetype'), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('parts_replaced', sa.JSON(), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('paid_amount', sa.Float(), nullable=True),
        sa.Column('remaining_amount', sa.Float(), nullable=True),
        sa.Column('payment_history', sa.JSON(), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('technician_name', sa.String(length=255), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('document_url', sa.String(length=1024), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_service_logs_equipment_id', 'service_logs', ['equipment_id'])

    op.create_table(
        'maintenance_contracts',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('equipment_id', sa.String(length=36), nullable=False),
        sa.Column('equipment_name', sa.String(length=255), nullable=True),
        sa.Column('company_id', sa.String(length=36), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('engineer_ids', sa.JSON(), nullable=True),
        sa.Column('type', sa.Enum('AMC', 'CMC', name='contracttype'), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.Enum('ACTIVE', 'EXPIRED', name='contractstatus'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_maintenance_contracts_equipment_id', 'maintenance_contracts', ['equipment_id'])

    op.create_table(
        'vendors',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('machines', sa.JSON(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_vendors_company_name', 'vendors', ['company_name'])

    op.create_table(
        'engineers',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('company_id', sa.String(length=36), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('specialties', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_engineers_name', 'engineers', ['name'])

    op.create_table(
        'spare_parts',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=True),
        sa.Column('min_quantity', sa.Integer(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('supplier', sa.String(length=255), nullable=True),
        sa.Column('compatibility', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_spare_parts_name', 'spare_parts', ['name'])

    op.create_table(
        'payment_reminders',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('source_id', sa.String(length=36), nullable=False),
        sa.Column('source_type', sa.Enum('EQUIPMENT', 'SERVICE', name='remindersource'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('provider', sa.String(length=255), nullable=True),
        sa.Column('amount_to_pay', sa.Float(), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('lead_days', sa.Integer(), nullable=True),
        sa.Column('status', sa.Enum('PENDING', 'PAID', 'CANCELLED', name='reminderstatus'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_payment_reminders_source_id', 'payment_reminders', ['source_id'])
    op.create_index('ix_payment_reminders_scheduled_date', 'payment_reminders', ['scheduled_date'])

    op.create_table(
        'documents',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.Enum('MANUAL', 'CERTIFICATE', 'BILL', 'QUOTATION', 'OTHER', name='documentcategory'), nullable=True),
        sa.Column('equipment_id', sa.String(length=36), nullable=True),
        sa.Column('url', sa.String(length=1024), nullable=False),
        sa.Column('upload_date', sa.Date(), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index('ix_documents_name', 'documents', ['name'])
    op.create_index('ix_documents_equipment_id', 'documents', ['equipment_id'])


def downgrade():
    for table in (
        'documents', 'payment_reminders', 'spare_parts', 'engineers', 'vendors',
        'maintenance_contracts', 'service_logs', 'equipment', 'users',
    ):
        op.drop_table(table)
