"""create_catalog_tables

Revision ID: 3f1c9a2e7b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2e7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False,
                  comment="User's email address (used for login)"),
        sa.Column('hashed_password', sa.String(length=255), nullable=False,
                  comment='Bcrypt hashed password'),
        sa.Column('is_active', sa.Boolean(), nullable=False,
                  comment='Whether the account is active'),
        sa.Column('is_superuser', sa.Boolean(), nullable=False,
                  comment='Whether user has admin privileges'),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False,
                  comment='When the user registered'),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True,
                  comment='When the user last logged in'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=False,
                  comment="Author's first name"),
        sa.Column('last_name', sa.String(length=255), nullable=False,
                  comment="Author's last name"),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False,
                  comment='When the author record was created'),
        sa.Column('updated_at', sa.DateTime(timezone=True),
                  server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False,
                  comment='When the author record was last updated'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_authors_last_name'), 'authors', ['last_name'], unique=False)

    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False, comment='Book title'),
        sa.Column('cover_text', sa.Text(), nullable=True, comment='Back-cover text'),
        sa.Column('comment', sa.Text(), nullable=True,
                  comment='Editorial comment (API version 2.0+)'),
        sa.Column('author_id', sa.Integer(), nullable=True, comment='Author of the book'),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True),
                  server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['authors.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_author_id'), 'books', ['author_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_books_author_id'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_authors_last_name'), table_name='authors')
    op.drop_table('authors')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
