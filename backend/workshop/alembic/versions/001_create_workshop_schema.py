"""Create workshop schema and tables

Revision ID: 001_create_workshop_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_workshop_schema'
down_revision = None
branch_labels = None
depends_on = None

CONDITION_COLUMNS = [
    'tie_rod_links', 'tie_rod_ends', 'steering_box', 'steering_wheel',
    'front_shocks', 'rear_shocks', 'stabilizer_bar', 'control_arms',
    'front_tires', 'rear_tires', 'wheel_balancing', 'wheel_alignment',
    'high_beams', 'low_beams', 'fog_lights', 'reverse_lights', 'turn_signals', 'hazard_lights',
    'front_discs_drums', 'rear_discs_drums', 'front_brake_pads', 'rear_brake_pads',
]

FLAG_COLUMNS = [
    'replaced_engine_oil', 'replaced_oil_filter', 'replaced_engine_air_filter', 'replaced_cabin_air_filter',
    'brake_fluid_level', 'coolant_level', 'washer_fluid_level', 'engine_oil_level',
    'drum_disc_deglazing', 'brake_adjustment', 'tire_pressure_calibration', 'tire_torque', 'tire_rotation',
]


def upgrade():
    # Catalog
    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False, unique=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(length=150), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_access_at', sa.DateTime(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_role_id', 'users', ['role_id'])
    op.create_index('ix_users_active', 'users', ['active'])

    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(length=250), nullable=False),
        sa.Column('tax_id', sa.String(length=20), nullable=False),
        sa.Column('mobile_phone', sa.String(length=50), nullable=False),
        sa.Column('home_phone', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=150), nullable=True),
        sa.Column('street', sa.String(length=150), nullable=True),
        sa.Column('exterior_number', sa.String(length=50), nullable=True),
        sa.Column('neighborhood', sa.String(length=150), nullable=True),
        sa.Column('municipality', sa.String(length=150), nullable=True),
        sa.Column('state', sa.String(length=150), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_customers_mobile_phone', 'customers', ['mobile_phone'])

    op.create_table(
        'vehicles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('vin', sa.String(length=50), nullable=False),
        sa.Column('make', sa.String(length=100), nullable=True),
        sa.Column('model', sa.String(length=100), nullable=True),
        sa.Column('version', sa.String(length=100), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('color', sa.String(length=50), nullable=True),
        sa.Column('plates', sa.String(length=20), nullable=True),
        sa.Column('initial_odometer', sa.Integer(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_vehicles_vin', 'vehicles', ['vin'], unique=True)
    op.create_index('ix_vehicles_customer_id', 'vehicles', ['customer_id'])

    op.create_table(
        'service_types',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
    )

    op.create_table(
        'parts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('part_number', sa.String(length=50), nullable=False),
        sa.Column('part_type', sa.String(length=100), nullable=False),
        sa.Column('location', sa.String(length=10), nullable=True),
        sa.Column('vehicle_make', sa.String(length=50), nullable=True),
        sa.Column('vehicle_model', sa.String(length=50), nullable=True),
        sa.Column('vehicle_year', sa.Integer(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_parts_part_number', 'parts', ['part_number'], unique=True)

    # Orders and jobs
    op.create_table(
        'order_number_sequences',
        sa.Column('prefix', sa.String(length=3), primary_key=True),
        sa.Column('last_value', sa.Integer(), nullable=False),
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_number', sa.String(length=50), nullable=False),
        sa.Column('order_type_id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('vehicle_id', sa.Integer(), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('advisor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('service_type_id', sa.Integer(), sa.ForeignKey('service_types.id'), nullable=True),
        sa.Column('current_odometer', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('promised_delivery_at', sa.DateTime(), nullable=False),
        sa.Column('process_started_at', sa.DateTime(), nullable=True),
        sa.Column('finished_at', sa.DateTime(), nullable=True),
        sa.Column('delivered_at', sa.DateTime(), nullable=True),
        sa.Column('advisor_comments', sa.Text(), nullable=True),
        sa.Column('foreman_comments', sa.Text(), nullable=True),
        sa.Column('total_cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_jobs', sa.Integer(), nullable=False),
        sa.Column('completed_jobs', sa.Integer(), nullable=False),
        sa.Column('progress', sa.Numeric(5, 2), nullable=False),
        sa.Column('status', sa.Integer(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('has_evidence', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_orders_order_number', 'orders', ['order_number'], unique=True)
    op.create_index('ix_orders_order_type_id', 'orders', ['order_type_id'])
    op.create_index('ix_orders_vehicle_id', 'orders', ['vehicle_id'])
    op.create_index('ix_orders_advisor_id', 'orders', ['advisor_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('technician_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.Column('started_at', sa.DateTime(), nullable=True),
        sa.Column('finished_at', sa.DateTime(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('technician_comments', sa.Text(), nullable=True),
        sa.Column('foreman_comments', sa.Text(), nullable=True),
        sa.Column('status', sa.Integer(), nullable=False),
        sa.Column('parts_total', sa.Numeric(12, 2), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_jobs_order_id', 'jobs', ['order_id'])
    op.create_index('ix_jobs_technician_id', 'jobs', ['technician_id'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])
    op.create_index('ix_jobs_active', 'jobs', ['active'])

    op.create_table(
        'job_pauses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('paused_at', sa.DateTime(), nullable=False),
        sa.Column('resumed_at', sa.DateTime(), nullable=True),
        sa.Column('reason', sa.Text(), nullable=False),
    )
    op.create_index('ix_job_pauses_job_id', 'job_pauses', ['job_id'])

    op.create_table(
        'job_part_lines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('part_name', sa.String(length=200), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_job_part_lines_job_id', 'job_part_lines', ['job_id'])
    op.create_index('ix_job_part_lines_order_id', 'job_part_lines', ['order_id'])

    op.create_table(
        'job_checklists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('job_description', sa.Text(), nullable=False),
        *[sa.Column(name, sa.String(length=15), nullable=False) for name in CONDITION_COLUMNS],
        *[sa.Column(name, sa.Boolean(), nullable=False) for name in FLAG_COLUMNS],
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_job_checklists_job_id', 'job_checklists', ['job_id'], unique=True)
    op.create_index('ix_job_checklists_order_id', 'job_checklists', ['order_id'])

    op.create_table(
        'order_evidence',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('file_path', sa.String(length=500), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('is_work_evidence', sa.Boolean(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_order_evidence_order_id', 'order_evidence', ['order_id'])


def downgrade():
    op.drop_table('order_evidence')
    op.drop_table('job_checklists')
    op.drop_table('job_part_lines')
    op.drop_table('job_pauses')
    op.drop_table('jobs')
    op.drop_table('orders')
    op.drop_table('order_number_sequences')
    op.drop_table('parts')
    op.drop_table('service_types')
    op.drop_table('vehicles')
    op.drop_table('customers')
    op.drop_table('users')
    op.drop_table('roles')
