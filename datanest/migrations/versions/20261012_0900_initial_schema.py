"""Initial snippet catalog schema

Revision ID: 3f1c2a7d9e40
Revises:
Create Date: 2026-10-12 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """
    Create snippets, categories, tags, their join table, settings and the
    AI query log.

    Join rows cascade on both sides; a snippet's category is nulled when
    the category goes away.
    """
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name='ck_category_non_empty_name'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_categories_name', 'categories', ['name'], unique=True)
    op.create_index('ix_categories_updated_at', 'categories', ['updated_at'])

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('color', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("name != ''", name='ck_tag_non_empty_name'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tags_name', 'tags', ['name'], unique=True)
    op.create_index('ix_tags_updated_at', 'tags', ['updated_at'])

    op.create_table(
        'snippets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('code', sa.Text(), nullable=False),
        sa.Column('language', sa.String(length=64), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("title != ''", name='ck_snippet_non_empty_title'),
        sa.CheckConstraint("code != ''", name='ck_snippet_non_empty_code'),
        sa.CheckConstraint("language != ''", name='ck_snippet_non_empty_language'),
        sa.ForeignKeyConstraint(
            ['category_id'], ['categories.id'], ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_snippets_language', 'snippets', ['language'])
    op.create_index('ix_snippets_category_id', 'snippets', ['category_id'])
    op.create_index('ix_snippets_updated_at', 'snippets', ['updated_at'])

    op.create_table(
        'snippet_tags',
        sa.Column('snippet_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['snippet_id'], ['snippets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('snippet_id', 'tag_id'),
    )
    op.create_index('ix_snippet_tags_tag_id', 'snippet_tags', ['tag_id'])

    op.create_table(
        'settings',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('ai_provider', sa.String(length=64), nullable=False),
        sa.Column('ai_api_key', sa.Text(), nullable=True),
        sa.Column('local_model_endpoint', sa.String(length=255), nullable=True),
        sa.Column('theme', sa.String(length=32), nullable=False),
        sa.Column('editor_theme', sa.String(length=32), nullable=False),
        sa.Column('font_size', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_settings_updated_at', 'settings', ['updated_at'])

    op.create_table(
        'ai_queries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('query', sa.Text(), nullable=False),
        sa.Column('response', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Drop every catalog table."""
    op.drop_table('ai_queries')
    op.drop_index('ix_settings_updated_at', table_name='settings')
    op.drop_table('settings')
    op.drop_index('ix_snippet_tags_tag_id', table_name='snippet_tags')
    op.drop_table('snippet_tags')
    op.drop_index('ix_snippets_updated_at', table_name='snippets')
    op.drop_index('ix_snippets_category_id', table_name='snippets')
    op.drop_index('ix_snippets_language', table_name='snippets')
    op.drop_table('snippets')
    op.drop_index('ix_tags_updated_at', table_name='tags')
    op.drop_index('ix_tags_name', table_name='tags')
    op.drop_table('tags')
    op.drop_index('ix_categories_updated_at', table_name='categories')
    op.drop_index('ix_categories_name', table_name='categories')
    op.drop_table('categories')
