"""initial schema

Revision ID: b7e1c2d3a4f5
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the health and safety records schema:
- users / route_access: accounts and per-user UI route grants
- lookup_items: admin-configurable dropdown options
- incidents / capas: reported incidents and their corrective actions
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b7e1c2d3a4f5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('image', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("role IN ('ADMIN', 'USER')", name='ck_users_role'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'route_access',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('path', sa.String(length=255), nullable=False),
        sa.Column('is_prefix', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'path', name='uq_route_access_user_path'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_route_access_user_id', 'route_access', ['user_id'])

    op.create_table(
        'lookup_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=64), nullable=False),
        sa.Column('value', sa.String(length=128), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('type', 'value', name='uq_lookup_items_type_value'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_lookup_items_type_active', 'lookup_items', ['type', 'active'])

    op.create_table(
        'incidents',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('reporter_id', sa.Integer(), nullable=False),
        sa.Column('site', sa.String(length=128), nullable=False),
        sa.Column('occurred_at', sa.DateTime(), nullable=False),
        sa.Column('incident_area', sa.String(length=128), nullable=False),
        sa.Column('incident_category', sa.String(length=128), nullable=False),
        sa.Column('shift', sa.String(length=128), nullable=False),
        sa.Column('severity', sa.String(length=128), nullable=False),
        sa.Column('personnel_type', sa.String(length=128), nullable=False),
        sa.Column('injury_area', sa.String(length=128), nullable=False),
        sa.Column('operational_category', sa.String(length=128), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('risk_score', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['reporter_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_incidents_reporter_id', 'incidents', ['reporter_id'])
    op.create_index('ix_incidents_created_at', 'incidents', ['created_at'])

    op.create_table(
        'capas',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('incident_id', sa.Integer(), nullable=False),
        sa.Column('assigned_to_id', sa.Integer(), nullable=True),
        sa.Column('site', sa.String(length=128), nullable=False),
        sa.Column('occurred_at', sa.DateTime(), nullable=False),
        sa.Column('incident_area', sa.String(length=128), nullable=False),
        sa.Column('incident_category', sa.String(length=128), nullable=False),
        sa.Column('shift', sa.String(length=128), nullable=False),
        sa.Column('severity', sa.String(length=128), nullable=False),
        sa.Column('personnel_type', sa.String(length=128), nullable=False),
        sa.Column('operational_category', sa.String(length=128), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('action_taken', sa.Text(), nullable=False),
        sa.Column('cost_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('cost_currency', sa.String(length=8), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['incident_id'], ['incidents.id']),
        sa.ForeignKeyConstraint(['assigned_to_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_capas_incident_id', 'capas', ['incident_id'])
    op.create_index('ix_capas_assigned_to_id', 'capas', ['assigned_to_id'])
    op.create_index('ix_capas_created_at', 'capas', ['created_at'])


def downgrade():
    op.drop_table('capas')
    op.drop_table('incidents')
    op.drop_table('lookup_items')
    op.drop_table('route_access')
    op.drop_table('users')
