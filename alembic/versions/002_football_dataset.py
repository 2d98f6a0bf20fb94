"""Football dataset tables queried by the SQL sandbox.

Keys are the natural Transfermarkt identifiers; there are no foreign keys so
partial CSV exports still load.

Revision ID: 002_football_dataset
Revises: 001_initial_schema
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "002_football_dataset"
down_revision: str | None = "001_initial_schema"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE IF NOT EXISTS competitions (
            competition_id VARCHAR(20) PRIMARY KEY,
            competition_code VARCHAR(100),
            name VARCHAR(255),
            sub_type VARCHAR(100),
            type VARCHAR(100),
            country_id INTEGER,
            country_name VARCHAR(100),
            domestic_league_code VARCHAR(20),
            confederation VARCHAR(50),
            is_major_national_league BOOLEAN,
            url TEXT
        )
    """)

    op.execute("""
        CREATE TABLE IF NOT EXISTS clubs (
            club_id BIGINT PRIMARY KEY,
            club_code VARCHAR(100),
            name VARCHAR(255),
            domestic_competition_id VARCHAR(20),
            total_market_value BIGINT,
            squad_size INTEGER,
            average_age DOUBLE PRECISION,
            foreigners_number INTEGER,
            foreigners_percentage DOUBLE PRECISION,
            national_team_players INTEGER,
            stadium_name VARCHAR(255),
            stadium_seats INTEGER,
            net_transfer_record VARCHAR(50),
            coach_name VARCHAR(255),
            last_season INTEGER,
            url TEXT
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_clubs_domestic_competition ON clubs(domestic_competition_id)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS players (
            player_id BIGINT PRIMARY KEY,
            first_name VARCHAR(100),
            last_name VARCHAR(100),
            name VARCHAR(255),
            last_season INTEGER,
            current_club_id BIGINT,
            player_code VARCHAR(255),
            country_of_birth VARCHAR(100),
            city_of_birth VARCHAR(100),
            country_of_citizenship VARCHAR(100),
            date_of_birth DATE,
            sub_position VARCHAR(50),
            position VARCHAR(50),
            foot VARCHAR(20),
            height_in_cm INTEGER,
            contract_expiration_date DATE,
            agent_name VARCHAR(255),
            image_url TEXT,
            url TEXT,
            current_club_domestic_competition_id VARCHAR(20),
            current_club_name VARCHAR(255),
            market_value_in_eur BIGINT,
            highest_market_value_in_eur BIGINT
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_players_current_club ON players(current_club_id)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS games (
            game_id BIGINT PRIMARY KEY,
            competition_id VARCHAR(20),
            season INTEGER,
            round VARCHAR(100),
            date DATE,
            home_club_id BIGINT,
            away_club_id BIGINT,
            home_club_goals INTEGER,
            away_club_goals INTEGER,
            home_club_position INTEGER,
            away_club_position INTEGER,
            home_club_manager_name VARCHAR(255),
            away_club_manager_name VARCHAR(255),
            stadium VARCHAR(255),
            attendance INTEGER,
            referee VARCHAR(255),
            url TEXT,
            home_club_formation VARCHAR(50),
            away_club_formation VARCHAR(50),
            home_club_name VARCHAR(255),
            away_club_name VARCHAR(255),
            aggregate VARCHAR(20),
            competition_type VARCHAR(100)
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_games_competition ON games(competition_id)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS appearances (
            appearance_id VARCHAR(50) PRIMARY KEY,
            game_id BIGINT,
            player_id BIGINT,
            player_club_id BIGINT,
            player_current_club_id BIGINT,
            date DATE,
            player_name VARCHAR(255),
            competition_id VARCHAR(20),
            yellow_cards INTEGER,
            red_cards INTEGER,
            goals INTEGER,
            assists INTEGER,
            minutes_played INTEGER
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_appearances_player ON appearances(player_id)")
    op.execute("CREATE INDEX IF NOT EXISTS ix_appearances_game ON appearances(game_id)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS transfers (
            id BIGSERIAL PRIMARY KEY,
            player_id BIGINT,
            transfer_date DATE,
            transfer_season VARCHAR(20),
            from_club_id BIGINT,
            to_club_id BIGINT,
            from_club_name VARCHAR(255),
            to_club_name VARCHAR(255),
            transfer_fee BIGINT,
            market_value_in_eur BIGINT,
            player_name VARCHAR(255),
            CONSTRAINT uq_transfers_player_move UNIQUE (player_id, transfer_date, from_club_id, to_club_id)
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_transfers_player ON transfers(player_id)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS game_events (
            game_event_id VARCHAR(64) PRIMARY KEY,
            game_id BIGINT,
            minute INTEGER,
            type VARCHAR(50),
            club_id BIGINT,
            player_id BIGINT,
            description TEXT
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_game_events_game ON game_events(game_id)")


def downgrade() -> None:
    for table in ("game_events", "transfers", "appearances", "games", "players", "clubs", "competitions"):
        op.execute(f"DROP TABLE IF EXISTS {table}")  # noqa: S608
