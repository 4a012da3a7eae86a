"""initial schema: users, exercises, workout sessions/sets, refresh tokens

Revision ID: 8f1c2d3a4b5e
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '8f1c2d3a4b5e'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    op.create_table(
        'exercises',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_exercises_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_exercises'),
    )
    op.create_index('ix_exercises_user_created', 'exercises', ['user_id', 'created_at'], unique=False)

    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('exercise_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('total_weight', sa.Numeric(precision=14, scale=2), server_default='0', nullable=False),
        sa.Column('total_reps', sa.Integer(), server_default='0', nullable=False),
        sa.Column('sets_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], name='fk_workout_sessions_exercise_id_exercises', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_workout_sessions'),
    )
    op.create_index('ix_ws_exercise_date', 'workout_sessions', ['exercise_id', 'date'], unique=False)

    op.create_table(
        'workout_sets',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('session_id', sa.String(length=36), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('reps >= 1', name='ck_workout_sets_reps_positive'),
        sa.CheckConstraint('weight >= 0', name='ck_workout_sets_weight_non_negative'),
        sa.ForeignKeyConstraint(['session_id'], ['workout_sessions.id'], name='fk_workout_sets_session_id_workout_sessions', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_workout_sets'),
    )
    op.create_index('ix_workout_sets_session_id', 'workout_sets', ['session_id'], unique=False)

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(length=128), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('created_by_ip', sa.String(length=64), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('revoked_by_ip', sa.String(length=64), nullable=True),
        sa.Column('replaced_by_token', sa.String(length=128), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_refresh_tokens'),
        sa.UniqueConstraint('token', name='uq_refresh_tokens_token'),
    )
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'], unique=False)


def downgrade():
    op.drop_index('ix_refresh_tokens_user_id', table_name='refresh_tokens')
    op.drop_table('refresh_tokens')
    op.drop_index('ix_workout_sets_session_id', table_name='workout_sets')
    op.drop_table('workout_sets')
    op.drop_index('ix_ws_exercise_date', table_name='workout_sessions')
    op.drop_table('workout_sessions')
    op.drop_index('ix_exercises_user_created', table_name='exercises')
    op.drop_table('exercises')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
