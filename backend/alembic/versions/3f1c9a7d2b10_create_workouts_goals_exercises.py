"""create workouts, goals and exercises tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'workouts' not in tables:
        op.create_table(
            'workouts',
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('exercise_type', sa.String(), nullable=False),
            sa.Column('duration', sa.Integer(), nullable=False),
            sa.Column('calories', sa.Integer(), nullable=False),
            sa.Column('intensity', sa.String(length=10), nullable=False, server_default='medium'),
            sa.Column('notes', sa.String(), nullable=True),
            sa.Column('date', sa.DateTime(timezone=True), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index('ix_workouts_user_id', 'workouts', ['user_id'])
        op.create_index('ix_workouts_date', 'workouts', ['date'])

    if 'goals' not in tables:
        op.create_table(
            'goals',
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('target', sa.Integer(), nullable=False),
            sa.Column('current', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_goals_user_id', 'goals', ['user_id'])

    if 'exercises' not in tables:
        op.create_table(
            'exercises',
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('category', sa.String(), nullable=False),
            sa.Column('calories_per_minute', sa.Integer(), nullable=False),
            sa.Column('emoji', sa.String(), nullable=False, server_default=''),
        )


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS exercises')
    op.execute('DROP TABLE IF EXISTS goals')
    op.execute('DROP TABLE IF EXISTS workouts')
