"""create users table

Revision ID: 0001_create_users_table
Revises:
Create Date: 2025-01-15 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_users_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('email_verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('remember_token', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_name', 'users', ['name'])
    # Unique across live and deleted rows
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_email_verified_at', 'users', ['email_verified_at'])
    op.create_index('ix_users_deleted_at', 'users', ['deleted_at'])

    op.create_index('idx_users_email_status', 'users', ['email', 'deleted_at'])
    op.create_index('idx_users_creation_status', 'users', ['created_at', 'deleted_at'])
    op.create_index('idx_users_active_users', 'users', ['email_verified_at', 'deleted_at', 'created_at'])


def downgrade():
    op.drop_index('idx_users_active_users', table_name='users')
    op.drop_index('idx_users_creation_status', table_name='users')
    op.drop_index('idx_users_email_status', table_name='users')
    op.drop_index('ix_users_deleted_at', table_name='users')
    op.drop_index('ix_users_email_verified_at', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_name', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
