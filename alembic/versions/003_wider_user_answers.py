"""Allow answers of up to 500 characters.

Revision ID: 003_wider_user_answers
Revises: 002_football_dataset
Create Date: 2026-10-20
"""

from collections.abc import Sequence

from alembic import op

revision: str = "003_wider_user_answers"
down_revision: str | None = "002_football_dataset"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("ALTER TABLE game_answers ALTER COLUMN user_answer TYPE VARCHAR(500)")


def downgrade() -> None:
    op.execute("ALTER TABLE game_answers ALTER COLUMN user_answer TYPE VARCHAR(255) USING LEFT(user_answer, 255)")
