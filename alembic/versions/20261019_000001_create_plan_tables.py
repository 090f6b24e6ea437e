"""Create investment plan tables.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


MONEY = sa.DECIMAL(18, 8)
RATE = sa.DECIMAL(10, 4)


def upgrade() -> None:
    """Create users, plans, plan_instances, transactions, global_settings."""

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(255), nullable=True),
        sa.Column('wallet_balance', MONEY, nullable=False, server_default='0'),
        sa.Column(
            'bonus_balance',
            MONEY,
            nullable=False,
            server_default='0',
            comment='Promotional balance, consumed before wallet on activation',
        ),
        sa.Column('invited_by_id', sa.Integer(), nullable=True),
        # FK to plan_instances is added after that table exists
        sa.Column('active_plan_instance_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.ForeignKeyConstraint(
            ['invited_by_id'], ['users.id'],
            name='fk_users_invited_by_id_users', ondelete='SET NULL',
        ),
        sa.CheckConstraint('wallet_balance >= 0', name='ck_users_wallet_balance_non_negative'),
        sa.CheckConstraint('bonus_balance >= 0', name='ck_users_bonus_balance_non_negative'),
    )
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_invited_by_id', 'users', ['invited_by_id'])

    op.create_table(
        'plans',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('min_amount', MONEY, nullable=False),
        sa.Column('max_amount', MONEY, nullable=False),
        sa.Column('daily_yield_type', sa.String(20), nullable=False, server_default='percentage'),
        sa.Column('daily_yield_value', MONEY, nullable=False),
        sa.Column('duration_days', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(1024), nullable=False, server_default=''),
        sa.Column('hash_rate', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_plans'),
        sa.CheckConstraint('min_amount <= max_amount', name='ck_plans_min_not_above_max'),
        sa.CheckConstraint('min_amount > 0', name='ck_plans_min_amount_positive'),
        sa.CheckConstraint('duration_days > 0', name='ck_plans_duration_positive'),
    )

    op.create_table(
        'plan_instances',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=True),
        sa.Column('invested_amount', MONEY, nullable=False),
        sa.Column('daily_profit', MONEY, nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_collected_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_collected', MONEY, nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_plan_instances'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_plan_instances_user_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['plan_id'], ['plans.id'],
            name='fk_plan_instances_plan_id_plans', ondelete='SET NULL',
        ),
        sa.CheckConstraint('invested_amount > 0', name='ck_plan_instances_invested_amount_positive'),
        sa.CheckConstraint('total_collected >= 0', name='ck_plan_instances_total_collected_non_negative'),
    )
    op.create_index('ix_plan_instances_user_id', 'plan_instances', ['user_id'])
    op.create_index('ix_plan_instances_status', 'plan_instances', ['status'])
    op.create_index('idx_plan_instances_plan_status', 'plan_instances', ['plan_id', 'status'])
    op.create_index('idx_plan_instances_status_end', 'plan_instances', ['status', 'end_date'])
    op.create_index(
        'uq_plan_instances_one_active_per_user',
        'plan_instances',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
        sqlite_where=sa.text("status = 'active'"),
    )

    with op.batch_alter_table('users') as batch_op:
        batch_op.create_foreign_key(
            'fk_users_active_plan_instance_id_plan_instances',
            'plan_instances',
            ['active_plan_instance_id'],
            ['id'],
            ondelete='SET NULL',
        )

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('source_user_id', sa.Integer(), nullable=True),
        sa.Column('plan_instance_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_transactions'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_transactions_user_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['source_user_id'], ['users.id'],
            name='fk_transactions_source_user_id_users', ondelete='SET NULL',
        ),
        sa.ForeignKeyConstraint(
            ['plan_instance_id'], ['plan_instances.id'],
            name='fk_transactions_plan_instance_id_plan_instances', ondelete='SET NULL',
        ),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_type', 'transactions', ['type'])
    op.create_index('idx_transactions_user_created', 'transactions', ['user_id', 'created_at'])

    op.create_table(
        'global_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('config_key', sa.String(50), nullable=False),
        sa.Column('referral_commission_rate', RATE, nullable=False, server_default='0'),
        sa.Column('daily_commission_rate', RATE, nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_global_settings'),
        sa.UniqueConstraint('config_key', name='uq_global_settings_config_key'),
    )


def downgrade() -> None:
    """Drop investment plan tables."""
    op.drop_table('global_settings')

    op.drop_index('idx_transactions_user_created', table_name='transactions')
    op.drop_index('ix_transactions_type', table_name='transactions')
    op.drop_index('ix_transactions_user_id', table_name='transactions')
    op.drop_table('transactions')

    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_constraint(
            'fk_users_active_plan_instance_id_plan_instances', type_='foreignkey'
        )

    op.drop_index('uq_plan_instances_one_active_per_user', table_name='plan_instances')
    op.drop_index('idx_plan_instances_status_end', table_name='plan_instances')
    op.drop_index('idx_plan_instances_plan_status', table_name='plan_instances')
    op.drop_index('ix_plan_instances_status', table_name='plan_instances')
    op.drop_index('ix_plan_instances_user_id', table_name='plan_instances')
    op.drop_table('plan_instances')

    op.drop_table('plans')

    op.drop_index('ix_users_invited_by_id', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
