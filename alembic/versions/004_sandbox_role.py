"""Read-only role for the SQL sandbox.

The sandbox switches to this role for every user statement. It may read the
football dataset and nothing else, so the users, questions and game tables
stay out of reach.

Revision ID: 004_sandbox_role
Revises: 003_wider_user_answers
Create Date: 2026-10-20
"""

from collections.abc import Sequence

from alembic import op

from footballiq.config import get_settings
from footballiq.dataset.models import DATASET_MODELS

revision: str = "004_sandbox_role"
down_revision: str | None = "003_wider_user_answers"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    role = get_settings().sandbox_role
    if not role:
        return
    op.execute(f"""
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_roles WHERE rolname = '{role}') THEN
                CREATE ROLE {role} NOLOGIN;
            END IF;
        END
        $$
    """)
    # SET ROLE needs membership.
    op.execute(f"GRANT {role} TO CURRENT_USER")
    op.execute(f"GRANT USAGE ON SCHEMA public TO {role}")
    for model in DATASET_MODELS:
        op.execute(f"GRANT SELECT ON {model.__tablename__} TO {role}")  # noqa: S608


def downgrade() -> None:
    role = get_settings().sandbox_role
    if not role:
        return
    for model in DATASET_MODELS:
        op.execute(f"REVOKE SELECT ON {model.__tablename__} FROM {role}")  # noqa: S608
    op.execute(f"REVOKE USAGE ON SCHEMA public FROM {role}")
    op.execute(f"DROP ROLE IF EXISTS {role}")
