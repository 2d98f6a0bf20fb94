"""Initial schema: users, trivia questions and the game session ledger.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Users ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id BIGSERIAL PRIMARY KEY,
            username VARCHAR(50) UNIQUE NOT NULL,
            email VARCHAR(255) UNIQUE NOT NULL,
            password_hash VARCHAR(256) NOT NULL,
            favorite_team VARCHAR(100),
            total_score INTEGER NOT NULL DEFAULT 0,
            games_played INTEGER NOT NULL DEFAULT 0,
            highest_score INTEGER NOT NULL DEFAULT 0,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at TIMESTAMPTZ DEFAULT NOW(),
            updated_at TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT ck_users_total_score CHECK (total_score >= 0),
            CONSTRAINT ck_users_games_played CHECK (games_played >= 0),
            CONSTRAINT ck_users_highest_score CHECK (highest_score >= 0)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_users_highest_score
        ON users(highest_score DESC) WHERE is_active
    """)

    # --- Questions ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS questions (
            id BIGSERIAL PRIMARY KEY,
            question TEXT NOT NULL,
            options JSON NOT NULL,
            correct_answer VARCHAR(255) NOT NULL,
            difficulty VARCHAR(16) NOT NULL,
            category VARCHAR(50) NOT NULL,
            points INTEGER NOT NULL DEFAULT 10,
            explanation TEXT,
            sql_query TEXT,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            times_answered INTEGER NOT NULL DEFAULT 0,
            times_correct INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT ck_questions_points CHECK (points > 0)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_questions_difficulty_active
        ON questions(difficulty, is_active)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_questions_category
        ON questions(category)
    """)

    # --- Game Sessions ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS game_sessions (
            id BIGSERIAL PRIMARY KEY,
            user_id BIGINT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            score INTEGER NOT NULL DEFAULT 0,
            total_questions INTEGER NOT NULL,
            correct_answers INTEGER NOT NULL DEFAULT 0,
            difficulty VARCHAR(16) NOT NULL,
            status VARCHAR(16) NOT NULL,
            started_at TIMESTAMPTZ DEFAULT NOW(),
            completed_at TIMESTAMPTZ,
            time_spent_seconds INTEGER,
            CONSTRAINT ck_game_sessions_score CHECK (score >= 0),
            CONSTRAINT ck_game_sessions_correct_min CHECK (correct_answers >= 0),
            CONSTRAINT ck_game_sessions_correct_max CHECK (correct_answers <= total_questions),
            CONSTRAINT ck_game_sessions_status CHECK (status IN ('in_progress', 'completed', 'abandoned'))
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_game_sessions_user_status
        ON game_sessions(user_id, status)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_game_sessions_completed_at
        ON game_sessions(completed_at)
    """)

    # --- Game Answers ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS game_answers (
            id BIGSERIAL PRIMARY KEY,
            session_id BIGINT NOT NULL REFERENCES game_sessions(id) ON DELETE CASCADE,
            question_id BIGINT NOT NULL REFERENCES questions(id),
            user_answer VARCHAR(255) NOT NULL,
            is_correct BOOLEAN NOT NULL,
            points_earned INTEGER NOT NULL DEFAULT 0,
            time_spent_seconds INTEGER,
            answered_at TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT uq_game_answers_session_question UNIQUE (session_id, question_id)
        )
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS game_answers CASCADE")
    op.execute("DROP TABLE IF EXISTS game_sessions CASCADE")
    op.execute("DROP TABLE IF EXISTS questions CASCADE")
    op.execute("DROP TABLE IF EXISTS users CASCADE")
