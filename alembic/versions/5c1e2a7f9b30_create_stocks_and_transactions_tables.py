"""Create stocks and transactions tables

Revision ID: 5c1e2a7f9b30
Revises:
Create Date: 2025-03-14 10:12:41.518203

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e2a7f9b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

transaction_type = sa.Enum('BUY', 'SELL', name='transaction_type')


def upgrade() -> None:
    """
    Create the `stocks` table (unique symbol, prices as NUMERIC) and the
    `transactions` table.
    """
    op.create_table(
        'stocks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('symbol', sa.String(length=16), nullable=False),
        sa.Column('company_name', sa.String(), nullable=False),
        sa.Column('current_price', sa.Numeric(19, 2), nullable=False),
        sa.Column('previous_close', sa.Numeric(19, 2), nullable=True),
        sa.Column('change', sa.Numeric(19, 2), nullable=True),
        sa.Column('change_percent', sa.Numeric(19, 4), nullable=True),
        sa.Column('volume', sa.BigInteger(), nullable=True),
        sa.Column('last_updated', sa.DateTime(), nullable=True),
        sa.Column('sector', sa.String(), nullable=True),
        sa.Column('industry', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_stocks_id'), 'stocks', ['id'], unique=False)
    op.create_index(op.f('ix_stocks_symbol'), 'stocks', ['symbol'], unique=True)
    op.create_index(op.f('ix_stocks_sector'), 'stocks', ['sector'], unique=False)
    op.create_index(op.f('ix_stocks_industry'), 'stocks', ['industry'], unique=False)

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('type', transaction_type, nullable=False),
        sa.Column('stock_symbol', sa.String(length=16), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price_per_share', sa.Numeric(19, 2), nullable=False),
        sa.Column('total_value', sa.Numeric(19, 2), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('portfolio_id', sa.Integer(), nullable=True),
        sa.Column('notes', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_transactions_id'), 'transactions', ['id'], unique=False)
    op.create_index(op.f('ix_transactions_stock_symbol'), 'transactions', ['stock_symbol'], unique=False)


def downgrade() -> None:
    """
    Drop both tables and the transaction type enum.
    """
    op.drop_index(op.f('ix_transactions_stock_symbol'), table_name='transactions')
    op.drop_index(op.f('ix_transactions_id'), table_name='transactions')
    op.drop_table('transactions')
    transaction_type.drop(op.get_bind(), checkfirst=True)

    op.drop_index(op.f('ix_stocks_industry'), table_name='stocks')
    op.drop_index(op.f('ix_stocks_sector'), table_name='stocks')
    op.drop_index(op.f('ix_stocks_symbol'), table_name='stocks')
    op.drop_index(op.f('ix_stocks_id'), table_name='stocks')
    op.drop_table('stocks')
