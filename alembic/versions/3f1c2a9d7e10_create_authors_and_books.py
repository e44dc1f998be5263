"""create_authors_and_books

Revision ID: 3f1c2a9d7e10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7e10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=False, comment="Author's given name"),
        sa.Column('middle_name', sa.String(length=255), nullable=True, comment="Author's middle name"),
        sa.Column('last_name', sa.String(length=255), nullable=False, comment="Author's family name"),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
            comment='When the author record was created',
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
            comment='When the author record was last updated',
        ),
        sa.Column(
            'deleted_at',
            sa.DateTime(timezone=True),
            nullable=True,
            comment='When the author was soft-deleted, NULL while live',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_authors_first_name'), 'authors', ['first_name'], unique=False)
    op.create_index(op.f('ix_authors_last_name'), 'authors', ['last_name'], unique=False)
    op.create_index(op.f('ix_authors_deleted_at'), 'authors', ['deleted_at'], unique=False)

    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('published_date', sa.Date(), nullable=False, comment='Date of publication'),
        sa.Column('image_url', sa.String(length=2048), nullable=True, comment='Cover image URL'),
        sa.Column('description', sa.Text(), nullable=False, comment='Book description or summary'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_published_date'), 'books', ['published_date'], unique=False)
    op.create_index(op.f('ix_books_deleted_at'), 'books', ['deleted_at'], unique=False)

    op.create_table(
        'book_authors',
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['authors.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('book_id', 'author_id'),
        comment='Association table linking books to their authors',
    )


def downgrade() -> None:
    op.drop_table('book_authors')
    op.drop_index(op.f('ix_books_deleted_at'), table_name='books')
    op.drop_index(op.f('ix_books_published_date'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_authors_deleted_at'), table_name='authors')
    op.drop_index(op.f('ix_authors_last_name'), table_name='authors')
    op.drop_index(op.f('ix_authors_first_name'), table_name='authors')
    op.drop_table('authors')
