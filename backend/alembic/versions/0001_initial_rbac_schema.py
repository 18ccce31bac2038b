"""Create RBAC administration schema"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str | None = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_ONLY = sa.text('delete_at IS NULL')


def upgrade() -> None:
    """Apply schema changes."""
    # Create workers table
    op.create_table(
        'workers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('identity_document', sa.String(length=50), nullable=False),
        sa.Column('job_title', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_workers')),
        sa.UniqueConstraint('identity_document', name=op.f('uq_workers_identity_document'))
    )
    op.create_index('ix_workers_identity_document', 'workers', ['identity_document'], unique=False)

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('worker_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('delete_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['worker_id'], ['workers.id'], name=op.f('fk_users_worker_id_workers'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users'))
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)
    op.create_index(
        'uq_users_email_active',
        'users',
        ['email'],
        unique=True,
        postgresql_where=ACTIVE_ONLY,
        sqlite_where=ACTIVE_ONLY,
    )
    op.create_index(
        'uq_users_worker_id_active',
        'users',
        ['worker_id'],
        unique=True,
        postgresql_where=ACTIVE_ONLY,
        sqlite_where=ACTIVE_ONLY,
    )

    # Create worker_logins table
    op.create_table(
        'worker_logins',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('worker_id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=30), server_default='active', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['worker_id'], ['workers.id'], name=op.f('fk_worker_logins_worker_id_workers'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_worker_logins')),
        sa.UniqueConstraint('username', name=op.f('uq_worker_logins_username'))
    )
    op.create_index('ix_worker_logins_worker_id', 'worker_logins', ['worker_id'], unique=False)
    op.create_index('ix_worker_logins_username', 'worker_logins', ['username'], unique=False)

    # Create clients table
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('identity_document', sa.String(length=50), nullable=False),
        sa.Column('client_type', sa.String(length=50), nullable=False),
        sa.Column('phone', sa.BigInteger(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('socioeconomic_stratification', sa.Integer(), server_default='0', nullable=False),
        sa.Column('registration_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_clients')),
        sa.UniqueConstraint('identity_document', name=op.f('uq_clients_identity_document'))
    )
    op.create_index('ix_clients_identity_document', 'clients', ['identity_document'], unique=False)

    # Create roles table
    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('delete_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_roles'))
    )
    op.create_index('ix_roles_name', 'roles', ['name'], unique=False)

    # Create forms table
    op.create_table(
        'forms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_forms')),
        sa.UniqueConstraint('code', name=op.f('uq_forms_code'))
    )
    op.create_index('ix_forms_code', 'forms', ['code'], unique=False)

    # Create modules table
    op.create_table(
        'modules',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_modules')),
        sa.UniqueConstraint('code', name=op.f('uq_modules_code'))
    )
    op.create_index('ix_modules_code', 'modules', ['code'], unique=False)

    # Create permissions table
    op.create_table(
        'permissions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('can_read', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('can_create', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('can_update', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('can_delete', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_permissions'))
    )

    # Create form_modules table
    op.create_table(
        'form_modules',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('module_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('delete_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['form_id'], ['forms.id'], name=op.f('fk_form_modules_form_id_forms'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['module_id'], ['modules.id'], name=op.f('fk_form_modules_module_id_modules'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_form_modules'))
    )
    op.create_index('ix_form_modules_form_id', 'form_modules', ['form_id'], unique=False)
    op.create_index('ix_form_modules_module_id', 'form_modules', ['module_id'], unique=False)
    op.create_index(
        'uq_form_modules_module_id_form_id_active',
        'form_modules',
        ['module_id', 'form_id'],
        unique=True,
        postgresql_where=ACTIVE_ONLY,
        sqlite_where=ACTIVE_ONLY,
    )

    # Create rol_form_permissions table (no composite uniqueness, duplicates are OR-combined)
    op.create_table(
        'rol_form_permissions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('rol_id', sa.Integer(), nullable=False),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('permission_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('delete_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['rol_id'], ['roles.id'], name=op.f('fk_rol_form_permissions_rol_id_roles'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['form_id'], ['forms.id'], name=op.f('fk_rol_form_permissions_form_id_forms'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['permission_id'], ['permissions.id'], name=op.f('fk_rol_form_permissions_permission_id_permissions'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_rol_form_permissions'))
    )
    op.create_index('ix_rol_form_permissions_rol_id', 'rol_form_permissions', ['rol_id'], unique=False)
    op.create_index('ix_rol_form_permissions_form_id', 'rol_form_permissions', ['form_id'], unique=False)
    op.create_index('ix_rol_form_permissions_permission_id', 'rol_form_permissions', ['permission_id'], unique=False)

    # Create rol_users table
    op.create_table(
        'rol_users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('rol_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('delete_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_rol_users_user_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['rol_id'], ['roles.id'], name=op.f('fk_rol_users_rol_id_roles'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_rol_users'))
    )
    op.create_index('ix_rol_users_user_id', 'rol_users', ['user_id'], unique=False)
    op.create_index('ix_rol_users_rol_id', 'rol_users', ['rol_id'], unique=False)


def downgrade() -> None:
    """Revert schema changes."""
    op.drop_index('ix_rol_users_rol_id', table_name='rol_users')
    op.drop_index('ix_rol_users_user_id', table_name='rol_users')
    op.drop_table('rol_users')

    op.drop_index('ix_rol_form_permissions_permission_id', table_name='rol_form_permissions')
    op.drop_index('ix_rol_form_permissions_form_id', table_name='rol_form_permissions')
    op.drop_index('ix_rol_form_permissions_rol_id', table_name='rol_form_permissions')
    op.drop_table('rol_form_permissions')

    op.drop_index('uq_form_modules_module_id_form_id_active', table_name='form_modules')
    op.drop_index('ix_form_modules_module_id', table_name='form_modules')
    op.drop_index('ix_form_modules_form_id', table_name='form_modules')
    op.drop_table('form_modules')

    op.drop_table('permissions')

    op.drop_index('ix_modules_code', table_name='modules')
    op.drop_table('modules')

    op.drop_index('ix_forms_code', table_name='forms')
    op.drop_table('forms')

    op.drop_index('ix_roles_name', table_name='roles')
    op.drop_table('roles')

    op.drop_index('ix_clients_identity_document', table_name='clients')
    op.drop_table('clients')

    op.drop_index('ix_worker_logins_username', table_name='worker_logins')
    op.drop_index('ix_worker_logins_worker_id', table_name='worker_logins')
    op.drop_table('worker_logins')

    op.drop_index('uq_users_worker_id_active', table_name='users')
    op.drop_index('uq_users_email_active', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    op.drop_index('ix_workers_identity_document', table_name='workers')
    op.drop_table('workers')
