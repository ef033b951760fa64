"""add best_score table for the memory game ledger

Revision ID: 5c2a9e71b4d0
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9e71b4d0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'best_score' in set(insp.get_table_names()):
        return
    op.create_table(
        'best_score',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('moves', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('best_score') as batch_op:
        batch_op.create_index('ix_best_score_key', ['key'], unique=True)


def downgrade():
    with op.batch_alter_table('best_score') as batch_op:
        batch_op.drop_index('ix_best_score_key')
    op.drop_table('best_score')
