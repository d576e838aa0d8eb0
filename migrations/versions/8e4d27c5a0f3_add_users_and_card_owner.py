"""add users and card owner

Revision ID: 8e4d27c5a0f3
Revises: 3b1f6c2a9d10
Create Date: 2025-03-16 18:40:07.902114

"""
import logging
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8e4d27c5a0f3'
down_revision: Union[str, Sequence[str], None] = '3b1f6c2a9d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

logger = logging.getLogger("alembic.runtime.migration")

# Owns cards created before accounts existed. "!" is not a valid hash, so
# nobody can log in as this user.
LEGACY_USERNAME = 'legacy'


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 1. Add the column as nullable
    with op.batch_alter_table('cards') as batch:
        batch.add_column(sa.Column('owner_id', sa.Integer(), nullable=True))

    # 2. Backfill existing cards onto the legacy owner
    bind = op.get_bind()
    existing = bind.execute(sa.text("SELECT COUNT(*) FROM cards")).scalar()
    if existing:
        logger.warning(f"Assigning {existing} existing cards to user '{LEGACY_USERNAME}'")
        bind.execute(
            sa.text(
                "INSERT INTO users (full_name, username, email, password_hash) "
                "VALUES (:full_name, :username, :email, '!')"
            ),
            {
                "full_name": "Legacy cards",
                "username": LEGACY_USERNAME,
                "email": "legacy@localhost",
            },
        )
        legacy_id = bind.execute(
            sa.text("SELECT id FROM users WHERE username = :username"),
            {"username": LEGACY_USERNAME},
        ).scalar()
        bind.execute(
            sa.text("UPDATE cards SET owner_id = :owner_id WHERE owner_id IS NULL"),
            {"owner_id": legacy_id},
        )

    # 3. Tighten to non-nullable and add the foreign key
    with op.batch_alter_table('cards') as batch:
        batch.alter_column('owner_id', existing_type=sa.Integer(), nullable=False)
        batch.create_index('ix_cards_owner_id', ['owner_id'])
        batch.create_foreign_key(
            'fk_cards_owner_id_users',
            'users',
            ['owner_id'],
            ['id'],
            ondelete='CASCADE',
        )

def downgrade():
    with op.batch_alter_table('cards') as batch:
        batch.drop_constraint('fk_cards_owner_id_users', type_='foreignkey')
        batch.drop_index('ix_cards_owner_id')
        batch.drop_column('owner_id')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
