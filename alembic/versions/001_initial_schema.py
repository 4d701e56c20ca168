"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:12:44.311027

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('created_by', sa.String(length=255), nullable=False),
    ]


def _translation_revision_columns() -> list:
    return [
        sa.Column('revision', sa.Integer(), nullable=False),
        sa.Column('nb', sa.Text(), nullable=True),
        sa.Column('nn', sa.Text(), nullable=True),
        sa.Column('en', sa.Text(), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table('form'):
        op.create_table('form',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('skjemanummer', sa.String(length=24), nullable=False),
        sa.Column('path', sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_form_id'), 'form', ['id'], unique=False)
        op.create_index(op.f('ix_form_path'), 'form', ['path'], unique=True)

    if not inspector.has_table('form_revision'):
        op.create_table('form_revision',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('revision', sa.Integer(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('components', sa.Text(), nullable=False),
        sa.Column('properties', sa.Text(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['form_id'], ['form.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('form_id', 'revision', name='uq_form_revision')
        )
        op.create_index(op.f('ix_form_revision_id'), 'form_revision', ['id'], unique=False)
        op.create_index(op.f('ix_form_revision_form_id'), 'form_revision', ['form_id'], unique=False)

    if not inspector.has_table('form_translation'):
        op.create_table('form_translation',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('key', sa.Text(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['form_id'], ['form.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('form_id', 'key', name='uq_form_translation_key')
        )
        op.create_index(op.f('ix_form_translation_id'), 'form_translation', ['id'], unique=False)
        op.create_index(op.f('ix_form_translation_form_id'), 'form_translation', ['form_id'], unique=False)

    if not inspector.has_table('form_translation_revision'):
        op.create_table('form_translation_revision',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('form_translation_id', sa.Integer(), nullable=False),
        *_translation_revision_columns(),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['form_translation_id'], ['form_translation.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('form_translation_id', 'revision', name='uq_form_translation_revision')
        )
        op.create_index(op.f('ix_form_translation_revision_id'), 'form_translation_revision', ['id'], unique=False)
        op.create_index(
            op.f('ix_form_translation_revision_form_translation_id'),
            'form_translation_revision', ['form_translation_id'], unique=False
        )

    if not inspector.has_table('global_translation'):
        op.create_table('global_translation',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.Text(), nullable=False),
        sa.Column('tag', sa.String(length=255), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key')
        )
        op.create_index(op.f('ix_global_translation_id'), 'global_translation', ['id'], unique=False)

    if not inspector.has_table('global_translation_revision'):
        op.create_table('global_translation_revision',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('global_translation_id', sa.Integer(), nullable=False),
        *_translation_revision_columns(),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['global_translation_id'], ['global_translation.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('global_translation_id', 'revision', name='uq_global_translation_revision')
        )
        op.create_index(op.f('ix_global_translation_revision_id'), 'global_translation_revision', ['id'], unique=False)
        op.create_index(
            op.f('ix_global_translation_revision_global_translation_id'),
            'global_translation_revision', ['global_translation_id'], unique=False
        )

    if not inspector.has_table('published_global_translation'):
        op.create_table('published_global_translation',
        sa.Column('id', sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_published_global_translation_id'), 'published_global_translation', ['id'], unique=False)

    if not inspector.has_table('published_global_translation_revision'):
        op.create_table('published_global_translation_revision',
        sa.Column('published_global_translation_id', sa.Integer(), nullable=False),
        sa.Column('global_translation_revision_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['published_global_translation_id'], ['published_global_translation.id']),
        sa.ForeignKeyConstraint(['global_translation_revision_id'], ['global_translation_revision.id']),
        sa.PrimaryKeyConstraint('published_global_translation_id', 'global_translation_revision_id')
        )

    if not inspector.has_table('published_form_translation'):
        op.create_table('published_form_translation',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('form_id', sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['form_id'], ['form.id']),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_published_form_translation_id'), 'published_form_translation', ['id'], unique=False)
        op.create_index(
            op.f('ix_published_form_translation_form_id'), 'published_form_translation', ['form_id'], unique=False
        )

    if not inspector.has_table('published_form_translation_revision'):
        op.create_table('published_form_translation_revision',
        sa.Column('published_form_translation_id', sa.Integer(), nullable=False),
        sa.Column('form_translation_revision_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['published_form_translation_id'], ['published_form_translation.id']),
        sa.ForeignKeyConstraint(['form_translation_revision_id'], ['form_translation_revision.id']),
        sa.PrimaryKeyConstraint('published_form_translation_id', 'form_translation_revision_id')
        )

    if not inspector.has_table('form_publication'):
        op.create_table('form_publication',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('form_revision_id', sa.Integer(), nullable=False),
        sa.Column('published_form_translation_id', sa.Integer(), nullable=False),
        sa.Column('published_global_translation_id', sa.Integer(), nullable=True),
        sa.Column('languages', sa.JSON(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['form_revision_id'], ['form_revision.id']),
        sa.ForeignKeyConstraint(['published_form_translation_id'], ['published_form_translation.id']),
        sa.ForeignKeyConstraint(['published_global_translation_id'], ['published_global_translation.id']),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_form_publication_id'), 'form_publication', ['id'], unique=False)
        op.create_index(
            op.f('ix_form_publication_form_revision_id'), 'form_publication', ['form_revision_id'], unique=False
        )


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table in (
        'form_publication',
        'published_form_translation_revision',
        'published_form_translation',
        'published_global_translation_revision',
        'published_global_translation',
        'global_translation_revision',
        'global_translation',
        'form_translation_revision',
        'form_translation',
        'form_revision',
        'form',
    ):
        if inspector.has_table(table):
            op.drop_table(table)
