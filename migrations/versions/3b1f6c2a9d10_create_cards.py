"""create cards

Revision ID: 3b1f6c2a9d10
Revises:
Create Date: 2025-03-02 10:14:22.518303

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f6c2a9d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'cards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('assignee', sa.String(), nullable=True),
        sa.Column('board_id', sa.String(), nullable=False),
        sa.Column('priority', sa.String(), nullable=False, server_default='Medium'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_cards_id', 'cards', ['id'])
    op.create_index('ix_cards_board_id', 'cards', ['board_id'])


def downgrade():
    op.drop_index('ix_cards_board_id', table_name='cards')
    op.drop_index('ix_cards_id', table_name='cards')
    op.drop_table('cards')
