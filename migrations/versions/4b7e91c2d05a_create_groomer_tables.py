"""create_groomer_tables

Revision ID: 4b7e91c2d05a
Revises:
Create Date: 2026-10-17 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b7e91c2d05a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, shops, staff, invitations, dogs, catalog and appointment tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('profile_image', sa.String(length=500), nullable=True),
        sa.Column('provider', sa.String(length=20), server_default='local', nullable=False),
        sa.Column('provider_id', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('shop_id', sa.UUID(), nullable=True),
        sa.Column('refresh_token_hash', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "provider IN ('google', 'kakao', 'naver', 'local')", name='ck_profiles_provider'
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table('shops',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('created_by', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )

    # profiles.shop_id and shops.created_by reference each other
    op.create_foreign_key(
        'fk_profiles_shop_id', 'profiles', 'shops', ['shop_id'], ['id'], ondelete='SET NULL'
    )

    op.create_table('shop_members',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='staff', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('owner', 'manager', 'staff')", name='ck_shop_members_role'),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('shop_id', 'user_id', name='uq_shop_members_shop_user'),
    )
    op.create_index('ix_shop_members_shop_id', 'shop_members', ['shop_id'], unique=False)
    op.create_index('ix_shop_members_user_id', 'shop_members', ['user_id'], unique=False)

    op.create_table('invitations',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('invited_by', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='staff', nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('owner', 'manager', 'staff')", name='ck_invitations_role'),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'expired', 'cancelled')",
            name='ck_invitations_status',
        ),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['invited_by'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('token'),
    )
    op.create_index('ix_invitations_shop_id', 'invitations', ['shop_id'], unique=False)
    op.create_index('ix_invitations_email', 'invitations', ['email'], unique=False)

    op.create_table('grooming_types',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('default_price', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_grooming_types_shop_id', 'grooming_types', ['shop_id'], unique=False)

    op.create_table('dogs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('breed', sa.String(length=100), nullable=True),
        sa.Column('owner_name', sa.String(length=100), nullable=True),
        sa.Column('owner_phone_number', sa.String(length=50), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('birth_year', sa.Integer(), nullable=True),
        sa.Column('birth_month', sa.Integer(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            'birth_month IS NULL OR (birth_month >= 1 AND birth_month <= 12)',
            name='ck_dogs_birth_month',
        ),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_dogs_shop_id', 'dogs', ['shop_id'], unique=False)

    op.create_table('appointments',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('shop_id', sa.UUID(), nullable=False),
        sa.Column('dog_id', sa.UUID(), nullable=False),
        sa.Column('created_by', sa.UUID(), nullable=False),
        sa.Column('assigned_user_id', sa.UUID(), nullable=True),
        sa.Column('appointment_at', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('grooming_type', sa.String(length=255), nullable=True),
        sa.Column('memo', sa.Text(), nullable=True),
        sa.Column('amount', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='scheduled', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "status IN ('scheduled', 'in_progress', 'completed', 'cancelled', 'settled')",
            name='ck_appointments_status',
        ),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['dog_id'], ['dogs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assigned_user_id'], ['profiles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_appointments_shop_id', 'appointments', ['shop_id'], unique=False)
    op.create_index('ix_appointments_dog_id', 'appointments', ['dog_id'], unique=False)
    op.create_index('ix_appointments_created_by', 'appointments', ['created_by'], unique=False)
    op.create_index(
        'ix_appointments_appointment_at', 'appointments', ['appointment_at'], unique=False
    )

    op.create_table('appointment_service_lines',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('appointment_id', sa.UUID(), nullable=False),
        sa.Column('grooming_type_id', sa.UUID(), nullable=False),
        sa.Column('applied_price', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['appointment_id'], ['appointments.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['grooming_type_id'], ['grooming_types.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_appointment_service_lines_appointment_id',
        'appointment_service_lines',
        ['appointment_id'],
        unique=False,
    )


def downgrade() -> None:
    """Drop all scheduler tables."""
    op.drop_index(
        'ix_appointment_service_lines_appointment_id', table_name='appointment_service_lines'
    )
    op.drop_table('appointment_service_lines')
    op.drop_index('ix_appointments_appointment_at', table_name='appointments')
    op.drop_index('ix_appointments_created_by', table_name='appointments')
    op.drop_index('ix_appointments_dog_id', table_name='appointments')
    op.drop_index('ix_appointments_shop_id', table_name='appointments')
    op.drop_table('appointments')
    op.drop_index('ix_dogs_shop_id', table_name='dogs')
    op.drop_table('dogs')
    op.drop_index('ix_grooming_types_shop_id', table_name='grooming_types')
    op.drop_table('grooming_types')
    op.drop_index('ix_invitations_email', table_name='invitations')
    op.drop_index('ix_invitations_shop_id', table_name='invitations')
    op.drop_table('invitations')
    op.drop_index('ix_shop_members_user_id', table_name='shop_members')
    op.drop_index('ix_shop_members_shop_id', table_name='shop_members')
    op.drop_table('shop_members')
    op.drop_constraint('fk_profiles_shop_id', 'profiles', type_='foreignkey')
    op.drop_table('shops')
    op.drop_table('profiles')
