"""create user_profiles table

Revision ID: 0002_create_user_profiles_table
Revises: 0001_create_users_table
Create Date: 2025-01-15 00:01:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002_create_user_profiles_table'
down_revision = '0001_create_users_table'
branch_labels = None
depends_on = None

gender_type = sa.Enum('male', 'female', 'other', 'prefer_not_to_say', name='gender_type')


def upgrade():
    op.create_table(
        'user_profiles',
        sa.Column(
            'user_id',
            sa.Integer(),
            sa.ForeignKey('users.id', ondelete='CASCADE', onupdate='CASCADE'),
            primary_key=True,
        ),
        sa.Column('phone', sa.String(length=20)),
        sa.Column('birth_date', sa.Date()),
        sa.Column('gender', gender_type),
        sa.Column('bio', sa.Text()),
        sa.Column('website', sa.String(length=255)),
        sa.Column('address_line_1', sa.String(length=255)),
        sa.Column('address_line_2', sa.String(length=255)),
        sa.Column('city', sa.String(length=100)),
        sa.Column('state', sa.String(length=100)),
        sa.Column('postal_code', sa.String(length=20)),
        sa.Column('country', sa.String(length=2)),  # ISO 3166-1 alpha-2
        sa.Column('preferences', sa.JSON()),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('accepts_marketing', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('timezone', sa.String(length=50), nullable=False, server_default='UTC'),
        sa.Column('locale', sa.String(length=10), nullable=False, server_default='es'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )

    op.create_index('ix_user_profiles_phone', 'user_profiles', ['phone'])
    op.create_index('ix_user_profiles_country', 'user_profiles', ['country'])
    op.create_index('idx_user_profiles_user_visibility', 'user_profiles', ['user_id', 'is_public'])
    op.create_index('idx_user_profiles_location', 'user_profiles', ['country', 'city'])
    op.create_index('idx_user_profiles_created_at', 'user_profiles', ['created_at'])


def downgrade():
    op.drop_index('idx_user_profiles_created_at', table_name='user_profiles')
    op.drop_index('idx_user_profiles_location', table_name='user_profiles')
    op.drop_index('idx_user_profiles_user_visibility', table_name='user_profiles')
    op.drop_index('ix_user_profiles_country', table_name='user_profiles')
    op.drop_index('ix_user_profiles_phone', table_name='user_profiles')
    op.drop_table('user_profiles')
    gender_type.drop(op.get_bind(), checkfirst=True)
