"""Seed role catalog and default service type

Revision ID: 002_seed_roles
Revises: 001_create_workshop_schema
Create Date: 2026-10-19 09:30:00.000000

"""
from alembic import op

# revision identifiers, used by Alembic.
revision = '002_seed_roles'
down_revision = '001_create_workshop_schema'
branch_labels = None
depends_on = None


def upgrade():
    # Role ids are fixed; the services compare against them.
    op.execute("""
        INSERT INTO roles (id, name, description, created_at) VALUES
        (1, 'Administrador', 'Full access to the workshop backend', CURRENT_TIMESTAMP),
        (2, 'Asesor', 'Creates orders on behalf of customers', CURRENT_TIMESTAMP),
        (3, 'Jefe de Taller', 'Assigns technicians to jobs', CURRENT_TIMESTAMP),
        (4, 'Almacen', 'Manages the parts inventory', CURRENT_TIMESTAMP),
        (5, 'Tecnico', 'Executes jobs', CURRENT_TIMESTAMP)
    """)

    op.execute("""
        INSERT INTO service_types (name, description, base_price, active) VALUES
        ('Servicio de mantenimiento', 'Mantenimiento preventivo', 0, true)
    """)


def downgrade():
    op.execute("DELETE FROM service_types WHERE name = 'Servicio de mantenimiento'")
    op.execute("DELETE FROM roles WHERE id IN (1, 2, 3, 4, 5)")
