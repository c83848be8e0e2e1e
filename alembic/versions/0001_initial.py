"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', sa.String(64), primary_key=True)


def _created_at():
    return sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)


def upgrade():
    op.create_table('users',
        _id(),
        sa.Column('username', sa.String(30), nullable=False, unique=True),
        sa.Column('display_name', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('avatar_color', sa.String(16), nullable=False),
        sa.Column('is_admin', sa.Boolean, nullable=False),
        _created_at(),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table('sessions',
        _id(),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_sessions_token', 'sessions', ['token'], unique=True)
    op.create_index('idx_sessions_user_id', 'sessions', ['user_id'])

    op.create_table('spaces',
        _id(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('icon', sa.String(64), nullable=False),
        sa.Column('created_by', sa.String(64), sa.ForeignKey('users.id')),
        _created_at(),
    )

    op.create_table('projects',
        _id(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('space_id', sa.String(64), sa.ForeignKey('spaces.id', ondelete='SET NULL')),
        sa.Column('priority', sa.String(16), nullable=False),
        sa.Column('status', sa.String(16), nullable=False),
        sa.Column('assigned_to', sa.String(64), sa.ForeignKey('users.id', ondelete='SET NULL')),
        sa.Column('estimated_budget', sa.Float, nullable=False),
        sa.Column('spent_budget', sa.Float, nullable=False),
        sa.Column('time_estimate', sa.String(64), nullable=False),
        sa.Column('due_date', sa.String(32)),
        sa.Column('created_by', sa.String(64), sa.ForeignKey('users.id')),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name='ck_projects_priority'),
        sa.CheckConstraint(
            "status IN ('not_started', 'planning', 'in_progress', 'almost_done', 'complete')",
            name='ck_projects_status',
        ),
        sa.CheckConstraint('estimated_budget >= 0', name='ck_projects_estimated_budget'),
        sa.CheckConstraint('spent_budget >= 0', name='ck_projects_spent_budget'),
    )
    op.create_index('idx_projects_updated_at', 'projects', [sa.text('updated_at DESC')])
    op.create_index('idx_projects_space_id', 'projects', ['space_id'])

    op.create_table('project_tags',
        _id(),
        sa.Column('project_id', sa.String(64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tag_name', sa.String(255), nullable=False),
    )
    op.create_index('idx_project_tags_project_id', 'project_tags', ['project_id'])

    op.create_table('project_photos',
        _id(),
        sa.Column('project_id', sa.String(64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_path', sa.String(512), nullable=False),
        sa.Column('caption', sa.Text, nullable=False),
        sa.Column('photo_type', sa.String(16), nullable=False),
        sa.Column('uploaded_by', sa.String(64), sa.ForeignKey('users.id')),
        _created_at(),
        sa.CheckConstraint(
            "photo_type IN ('before', 'during', 'after', 'inspiration', 'general')",
            name='ck_project_photos_photo_type',
        ),
    )
    op.create_index('idx_project_photos_project_id', 'project_photos', ['project_id', sa.text('created_at DESC')])

    op.create_table('project_comments',
        _id(),
        sa.Column('project_id', sa.String(64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('comment_text', sa.Text, nullable=False),
        _created_at(),
    )
    op.create_index('idx_project_comments_project_id', 'project_comments', ['project_id', 'created_at'])

    op.create_table('design_board_items',
        _id(),
        sa.Column('project_id', sa.String(64), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_type', sa.String(16), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('url', sa.String(2048), nullable=False),
        sa.Column('file_path', sa.String(512), nullable=False),
        sa.Column('added_by', sa.String(64), sa.ForeignKey('users.id')),
        _created_at(),
        sa.CheckConstraint("item_type IN ('link', 'photo', 'note')", name='ck_design_board_items_item_type'),
    )
    op.create_index(
        'idx_design_board_items_project_id', 'design_board_items', ['project_id', sa.text('created_at DESC')]
    )

    op.create_table('design_board_comments',
        _id(),
        sa.Column(
            'board_item_id', sa.String(64),
            sa.ForeignKey('design_board_items.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('comment_text', sa.Text, nullable=False),
        _created_at(),
    )
    op.create_index(
        'idx_design_board_comments_item_id', 'design_board_comments', ['board_item_id', 'created_at']
    )

    op.create_table('activity_log',
        _id(),
        sa.Column('project_id', sa.String(64), sa.ForeignKey('projects.id', ondelete='CASCADE')),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id')),
        sa.Column('action', sa.String(32), nullable=False),
        sa.Column('details', sa.Text, nullable=False),
        _created_at(),
    )
    op.create_index('idx_activity_log_created_at', 'activity_log', [sa.text('created_at DESC')])


def downgrade():
    for table in (
        'activity_log',
        'design_board_comments',
        'design_board_items',
        'project_comments',
        'project_photos',
        'project_tags',
        'projects',
        'spaces',
        'sessions',
        'users',
    ):
        op.drop_table(table)
