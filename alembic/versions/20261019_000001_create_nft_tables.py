"""Create owners, tokens, transfers and sync_state tables

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'owners',
        sa.Column('id', sa.String(42), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'tokens',
        sa.Column('id', sa.String(78), nullable=False),
        sa.Column('uri', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.String(42), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['owners.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tokens_owner_id', 'tokens', ['owner_id'])

    op.create_table(
        'transfers',
        sa.Column('id', sa.String(32), nullable=False),
        sa.Column('block_number', sa.BigInteger(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('tx_hash', sa.String(66), nullable=False),
        sa.Column('from_id', sa.String(42), nullable=False),
        sa.Column('to_id', sa.String(42), nullable=False),
        sa.Column('token_id', sa.String(78), nullable=False),
        sa.ForeignKeyConstraint(['from_id'], ['owners.id'], ),
        sa.ForeignKeyConstraint(['to_id'], ['owners.id'], ),
        sa.ForeignKeyConstraint(['token_id'], ['tokens.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_transfers_block_number', 'transfers', ['block_number'])
    op.create_index('ix_transfers_tx_hash', 'transfers', ['tx_hash'])
    op.create_index('ix_transfers_from_id', 'transfers', ['from_id'])
    op.create_index('ix_transfers_to_id', 'transfers', ['to_id'])
    op.create_index('ix_transfers_token_id', 'transfers', ['token_id'])

    op.create_table(
        'sync_state',
        sa.Column('id', sa.String(42), nullable=False),
        sa.Column('last_block', sa.BigInteger(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('sync_state')
    op.drop_index('ix_transfers_token_id', table_name='transfers')
    op.drop_index('ix_transfers_to_id', table_name='transfers')
    op.drop_index('ix_transfers_from_id', table_name='transfers')
    op.drop_index('ix_transfers_tx_hash', table_name='transfers')
    op.drop_index('ix_transfers_block_number', table_name='transfers')
    op.drop_table('transfers')
    op.drop_index('ix_tokens_owner_id', table_name='tokens')
    op.drop_table('tokens')
    op.drop_table('owners')
