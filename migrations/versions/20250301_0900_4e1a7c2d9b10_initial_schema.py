"""initial schema

Revision ID: 4e1a7c2d9b10
Revises:
Create Date: 2025-03-01 09:00:00.000000

Teams with their contracts, members with administration records, relatives
and activity logs, and the role / menu / package access configuration.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4e1a7c2d9b10'
down_revision = None
branch_labels = None
depends_on = None


def _status():
    return sa.Column('status', sa.String(length=20), nullable=False, server_default='active')


def _timestamps(updated=True):
    columns = [sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP'))]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')))
    return columns


def upgrade() -> None:
    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('authorized_menu', sa.JSON(), nullable=False),
        _status(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_roles_id', 'roles', ['id'])

    op.create_table(
        'menus',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url_menu', sa.String(length=255), nullable=True),
        sa.Column('icon_menu', sa.String(length=100), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('ordering_number', sa.Integer(), nullable=True),
        sa.Column('parent_menu', sa.JSON(), nullable=True),
        _status(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_menus_id', 'menus', ['id'])

    op.create_table(
        'packages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        sa.Column('selected_menu', sa.JSON(), nullable=True),
        _status(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_packages_id', 'packages', ['id'])

    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('team_name', sa.String(length=150), nullable=False),
        sa.Column('company_name', sa.String(length=150), nullable=True),
        sa.Column('hq_address', sa.Text(), nullable=True),
        sa.Column('manager_first_name', sa.String(length=100), nullable=True),
        sa.Column('manager_last_name', sa.String(length=100), nullable=True),
        sa.Column('manager_full_name', sa.String(length=200), nullable=True),
        sa.Column('manager_email', sa.String(length=150), nullable=True),
        sa.Column('manager_phone', sa.String(length=30), nullable=True),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        _status(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('team_name')
    )
    op.create_index('ix_teams_id', 'teams', ['id'])

    op.create_table(
        'team_contracts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('contract_number', sa.String(length=100), nullable=True),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('active_period_start', sa.DateTime(), nullable=True),
        sa.Column('active_period_end', sa.DateTime(), nullable=False),
        sa.Column('member_quota', sa.Integer(), nullable=False),
        sa.Column('package_id', sa.Integer(), nullable=False),
        _status(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('contract_number'),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['package_id'], ['packages.id'])
    )
    op.create_index('ix_team_contracts_id', 'team_contracts', ['id'])

    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('uid', sa.String(length=9), nullable=False),
        sa.Column('email', sa.String(length=150), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('full_name', sa.String(length=200), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('employee_number', sa.String(length=50), nullable=True),
        sa.Column('joined_date', sa.Date(), nullable=True),
        sa.Column('resigned_date', sa.Date(), nullable=True),
        sa.Column('home_address', sa.Text(), nullable=True),
        sa.Column('district', sa.String(length=100), nullable=True),
        sa.Column('sub_district', sa.String(length=100), nullable=True),
        sa.Column('birth_place', sa.String(length=100), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('nationality', sa.String(length=100), nullable=True),
        sa.Column('religion', sa.String(length=50), nullable=True),
        sa.Column('marital_status', sa.String(length=50), nullable=True),
        sa.Column('profile_image', sa.String(length=255), nullable=True),
        sa.Column('team_id', sa.Integer(), nullable=True),
        sa.Column('role_id', sa.Integer(), nullable=False),
        _status(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'])
    )
    op.create_index('ix_members_id', 'members', ['id'])
    op.create_index('ix_members_uid', 'members', ['uid'])

    op.create_table(
        'member_administrations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('tax_number', sa.String(length=50), nullable=True),
        sa.Column('tax_number_attachment', sa.String(length=255), nullable=True),
        sa.Column('identity_number', sa.String(length=50), nullable=True),
        sa.Column('card_number', sa.String(length=50), nullable=True),
        sa.Column('identity_number_attachment', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('member_id'),
        sa.ForeignKeyConstraint(['member_id'], ['members.id'], ondelete='CASCADE')
    )
    op.create_index('ix_member_administrations_id', 'member_administrations', ['id'])

    op.create_table(
        'member_relatives',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('relation_type', sa.String(length=50), nullable=True),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('is_emergency', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['member_id'], ['members.id'], ondelete='CASCADE')
    )
    op.create_index('ix_member_relatives_id', 'member_relatives', ['id'])

    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['member_id'], ['members.id'], ondelete='CASCADE')
    )
    op.create_index('ix_activity_logs_id', 'activity_logs', ['id'])
    op.create_index('ix_activity_logs_member_id', 'activity_logs', ['member_id'])


def downgrade() -> None:
    # Drop tables in reverse order to respect foreign key constraints
    op.drop_index('ix_activity_logs_member_id', table_name='activity_logs')
    op.drop_index('ix_activity_logs_id', table_name='activity_logs')
    op.drop_table('activity_logs')
    op.drop_index('ix_member_relatives_id', table_name='member_relatives')
    op.drop_table('member_relatives')
    op.drop_index('ix_member_administrations_id', table_name='member_administrations')
    op.drop_table('member_administrations')
    op.drop_index('ix_members_uid', table_name='members')
    op.drop_index('ix_members_id', table_name='members')
    op.drop_table('members')
    op.drop_index('ix_team_contracts_id', table_name='team_contracts')
    op.drop_table('team_contracts')
    op.drop_index('ix_teams_id', table_name='teams')
    op.drop_table('teams')
    op.drop_index('ix_packages_id', table_name='packages')
    op.drop_table('packages')
    op.drop_index('ix_menus_id', table_name='menus')
    op.drop_table('menus')
    op.drop_index('ix_roles_id', table_name='roles')
    op.drop_table('roles')
