"""ORM models for the football statistics dataset queried by the SQL sandbox.

Primary keys are the natural identifiers from the Transfermarkt CSV exports,
so the loader can replay a file without creating duplicates.
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import BigInteger, Boolean, Date, Float, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from footballiq.db.base import Base, BigIntId


class Competition(Base):
    __tablename__ = "competitions"

    competition_id: Mapped[str] = mapped_column(String(20), primary_key=True)
    competition_code: Mapped[str | None] = mapped_column(String(100))
    name: Mapped[str | None] = mapped_column(String(255))
    sub_type: Mapped[str | None] = mapped_column(String(100))
    type: Mapped[str | None] = mapped_column(String(100))
    country_id: Mapped[int | None] = mapped_column(Integer)
    country_name: Mapped[str | None] = mapped_column(String(100))
    domestic_league_code: Mapped[str | None] = mapped_column(String(20))
    confederation: Mapped[str | None] = mapped_column(String(50))
    is_major_national_league: Mapped[bool | None] = mapped_column(Boolean)
    url: Mapped[str | None] = mapped_column(Text)


class Club(Base):
    __tablename__ = "clubs"
    __table_args__ = (Index("ix_clubs_domestic_competition", "domestic_competition_id"),)

    club_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    club_code: Mapped[str | None] = mapped_column(String(100))
    name: Mapped[str | None] = mapped_column(String(255))
    domestic_competition_id: Mapped[str | None] = mapped_column(String(20))
    total_market_value: Mapped[int | None] = mapped_column(BigInteger)
    squad_size: Mapped[int | None] = mapped_column(Integer)
    average_age: Mapped[float | None] = mapped_column(Float)
    foreigners_number: Mapped[int | None] = mapped_column(Integer)
    foreigners_percentage: Mapped[float | None] = mapped_column(Float)
    national_team_players: Mapped[int | None] = mapped_column(Integer)
    stadium_name: Mapped[str | None] = mapped_column(String(255))
    stadium_seats: Mapped[int | None] = mapped_column(Integer)
    net_transfer_record: Mapped[str | None] = mapped_column(String(50))
    coach_name: Mapped[str | None] = mapped_column(String(255))
    last_season: Mapped[int | None] = mapped_column(Integer)
    url: Mapped[str | None] = mapped_column(Text)


class Player(Base):
    __tablename__ = "players"
    __table_args__ = (Index("ix_players_current_club", "current_club_id"),)

    player_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    name: Mapped[str | None] = mapped_column(String(255))
    last_season: Mapped[int | None] = mapped_column(Integer)
    current_club_id: Mapped[int | None] = mapped_column(BigInteger)
    player_code: Mapped[str | None] = mapped_column(String(255))
    country_of_birth: Mapped[str | None] = mapped_column(String(100))
    city_of_birth: Mapped[str | None] = mapped_column(String(100))
    country_of_citizenship: Mapped[str | None] = mapped_column(String(100))
    date_of_birth: Mapped[dt.date | None] = mapped_column(Date)
    sub_position: Mapped[str | None] = mapped_column(String(50))
    position: Mapped[str | None] = mapped_column(String(50))
    foot: Mapped[str | None] = mapped_column(String(20))
    height_in_cm: Mapped[int | None] = mapped_column(Integer)
    contract_expiration_date: Mapped[dt.date | None] = mapped_column(Date)
    agent_name: Mapped[str | None] = mapped_column(String(255))
    image_url: Mapped[str | None] = mapped_column(Text)
    url: Mapped[str | None] = mapped_column(Text)
    current_club_domestic_competition_id: Mapped[str | None] = mapped_column(String(20))
    current_club_name: Mapped[str | None] = mapped_column(String(255))
    market_value_in_eur: Mapped[int | None] = mapped_column(BigInteger)
    highest_market_value_in_eur: Mapped[int | None] = mapped_column(BigInteger)


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (Index("ix_games_competition", "competition_id"),)

    game_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    competition_id: Mapped[str | None] = mapped_column(String(20))
    season: Mapped[int | None] = mapped_column(Integer)
    round: Mapped[str | None] = mapped_column(String(100))
    date: Mapped[dt.date | None] = mapped_column(Date)
    home_club_id: Mapped[int | None] = mapped_column(BigInteger)
    away_club_id: Mapped[int | None] = mapped_column(BigInteger)
    home_club_goals: Mapped[int | None] = mapped_column(Integer)
    away_club_goals: Mapped[int | None] = mapped_column(Integer)
    home_club_position: Mapped[int | None] = mapped_column(Integer)
    away_club_position: Mapped[int | None] = mapped_column(Integer)
    home_club_manager_name: Mapped[str | None] = mapped_column(String(255))
    away_club_manager_name: Mapped[str | None] = mapped_column(String(255))
    stadium: Mapped[str | None] = mapped_column(String(255))
    attendance: Mapped[int | None] = mapped_column(Integer)
    referee: Mapped[str | None] = mapped_column(String(255))
    url: Mapped[str | None] = mapped_column(Text)
    home_club_formation: Mapped[str | None] = mapped_column(String(50))
    away_club_formation: Mapped[str | None] = mapped_column(String(50))
    home_club_name: Mapped[str | None] = mapped_column(String(255))
    away_club_name: Mapped[str | None] = mapped_column(String(255))
    aggregate: Mapped[str | None] = mapped_column(String(20))
    competition_type: Mapped[str | None] = mapped_column(String(100))


class Appearance(Base):
    __tablename__ = "appearances"
    __table_args__ = (
        Index("ix_appearances_player", "player_id"),
        Index("ix_appearances_game", "game_id"),
    )

    appearance_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    game_id: Mapped[int | None] = mapped_column(BigInteger)
    player_id: Mapped[int | None] = mapped_column(BigInteger)
    player_club_id: Mapped[int | None] = mapped_column(BigInteger)
    player_current_club_id: Mapped[int | None] = mapped_column(BigInteger)
    date: Mapped[dt.date | None] = mapped_column(Date)
    player_name: Mapped[str | None] = mapped_column(String(255))
    competition_id: Mapped[str | None] = mapped_column(String(20))
    yellow_cards: Mapped[int | None] = mapped_column(Integer)
    red_cards: Mapped[int | None] = mapped_column(Integer)
    goals: Mapped[int | None] = mapped_column(Integer)
    assists: Mapped[int | None] = mapped_column(Integer)
    minutes_played: Mapped[int | None] = mapped_column(Integer)


class Transfer(Base):
    __tablename__ = "transfers"
    __table_args__ = (
        Index("ix_transfers_player", "player_id"),
        UniqueConstraint(
            "player_id", "transfer_date", "from_club_id", "to_club_id", name="uq_transfers_player_move"
        ),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    player_id: Mapped[int | None] = mapped_column(BigInteger)
    transfer_date: Mapped[dt.date | None] = mapped_column(Date)
    transfer_season: Mapped[str | None] = mapped_column(String(20))
    from_club_id: Mapped[int | None] = mapped_column(BigInteger)
    to_club_id: Mapped[int | None] = mapped_column(BigInteger)
    from_club_name: Mapped[str | None] = mapped_column(String(255))
    to_club_name: Mapped[str | None] = mapped_column(String(255))
    transfer_fee: Mapped[int | None] = mapped_column(BigInteger)
    market_value_in_eur: Mapped[int | None] = mapped_column(BigInteger)
    player_name: Mapped[str | None] = mapped_column(String(255))


class GameEvent(Base):
    __tablename__ = "game_events"
    __table_args__ = (Index("ix_game_events_game", "game_id"),)

    game_event_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    game_id: Mapped[int | None] = mapped_column(BigInteger)
    minute: Mapped[int | None] = mapped_column(Integer)
    type: Mapped[str | None] = mapped_column(String(50))
    club_id: Mapped[int | None] = mapped_column(BigInteger)
    player_id: Mapped[int | None] = mapped_column(BigInteger)
    description: Mapped[str | None] = mapped_column(Text)


# Load order respects logical references between the tables.
DATASET_MODELS: tuple[type[Base], ...] = (
    Competition,
    Club,
    Player,
    Game,
    Appearance,
    Transfer,
    GameEvent,
)
