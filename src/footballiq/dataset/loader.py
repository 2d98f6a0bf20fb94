"""Bulk loader for the Transfermarkt-style football CSV exports.

Usage::

    python -m footballiq.dataset.loader ./db            # create missing tables, append
    python -m footballiq.dataset.loader ./db --rebuild  # drop and recreate the dataset tables

Rows are inserted in batches; rows that collide with an existing key are
skipped. A batch the database rejects is logged and the load carries on with
the next one.
"""

from __future__ import annotations

import argparse
import asyncio
import csv
import math
import re
from collections.abc import Callable, Iterable, Iterator
from datetime import date
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from footballiq.dataset.models import (
    DATASET_MODELS,
    Appearance,
    Club,
    Competition,
    Game,
    GameEvent,
    Player,
    Transfer,
)
from footballiq.db.base import Base
from footballiq.sql.executor import grant_dataset_access

logger = structlog.get_logger()

BATCH_SIZE = 5000
NULL_MARKERS = frozenset({"", "NA", "null", "None", "nan"})
_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_CURRENCY_SUFFIXES: tuple[tuple[str, int], ...] = (("bn", 1_000_000_000), ("m", 1_000_000), ("k", 1_000))


# --- Cleaning ---


def _blank(value: Any) -> bool:
    return value is None or str(value).strip() in NULL_MARKERS


def _leading_number(text: str) -> float | None:
    match = _NUMBER_PREFIX.match(text.strip())
    return float(match.group(0)) if match else None


def clean_text(value: Any) -> str | None:
    return None if _blank(value) else str(value)


def clean_int(value: Any) -> int | None:
    """Lenient integer parse: ``"12.7"`` gives 12, garbage gives None."""
    if _blank(value):
        return None
    number = _leading_number(str(value))
    return None if number is None else int(number)


def clean_float(value: Any) -> float | None:
    if _blank(value):
        return None
    return _leading_number(str(value))


def clean_currency(value: Any) -> int | None:
    """``"€12.5m"`` -> 12500000, ``"€800k"`` -> 800000, ``"€1.2bn"`` -> 1200000000."""
    if _blank(value):
        return None
    text = str(value).replace("€", "").replace(" ", "")
    multiplier = 1
    for suffix, factor in _CURRENCY_SUFFIXES:
        if text.lower().endswith(suffix):
            multiplier = factor
            text = text[: -len(suffix)]
            break
    number = _leading_number(text)
    if number is None:
        return None
    return math.floor(number * multiplier + 0.5)


def clean_date(value: Any) -> date | None:
    if _blank(value):
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def clean_bool(value: Any) -> bool | None:
    if _blank(value):
        return None
    return str(value).strip().lower() == "true"


# --- Row mappers ---

Mapper = Callable[[dict[str, str]], dict[str, Any]]


def _map(**columns: Callable[[Any], Any]) -> Mapper:
    def mapper(row: dict[str, str]) -> dict[str, Any]:
        return {name: clean(row.get(name)) for name, clean in columns.items()}

    return mapper


MAPPERS: dict[str, Mapper] = {
    "competitions": _map(
        competition_id=clean_text,
        competition_code=clean_text,
        name=clean_text,
        sub_type=clean_text,
        type=clean_text,
        country_id=clean_int,
        country_name=clean_text,
        domestic_league_code=clean_text,
        confederation=clean_text,
        is_major_national_league=clean_bool,
        url=clean_text,
    ),
    "clubs": _map(
        club_id=clean_int,
        club_code=clean_text,
        name=clean_text,
        domestic_competition_id=clean_text,
        total_market_value=clean_currency,
        squad_size=clean_int,
        average_age=clean_float,
        foreigners_number=clean_int,
        foreigners_percentage=clean_float,
        national_team_players=clean_int,
        stadium_name=clean_text,
        stadium_seats=clean_int,
        net_transfer_record=clean_text,
        coach_name=clean_text,
        last_season=clean_int,
        url=clean_text,
    ),
    "players": _map(
        player_id=clean_int,
        first_name=clean_text,
        last_name=clean_text,
        name=clean_text,
        last_season=clean_int,
        current_club_id=clean_int,
        player_code=clean_text,
        country_of_birth=clean_text,
        city_of_birth=clean_text,
        country_of_citizenship=clean_text,
        date_of_birth=clean_date,
        sub_position=clean_text,
        position=clean_text,
        foot=clean_text,
        height_in_cm=clean_int,
        contract_expiration_date=clean_date,
        agent_name=clean_text,
        image_url=clean_text,
        url=clean_text,
        current_club_domestic_competition_id=clean_text,
        current_club_name=clean_text,
        market_value_in_eur=clean_currency,
        highest_market_value_in_eur=clean_currency,
    ),
    "games": _map(
        game_id=clean_int,
        competition_id=clean_text,
        season=clean_int,
        round=clean_text,
        date=clean_date,
        home_club_id=clean_int,
        away_club_id=clean_int,
        home_club_goals=clean_int,
        away_club_goals=clean_int,
        home_club_position=clean_int,
        away_club_position=clean_int,
        home_club_manager_name=clean_text,
        away_club_manager_name=clean_text,
        stadium=clean_text,
        attendance=clean_int,
        referee=clean_text,
        url=clean_text,
        home_club_formation=clean_text,
        away_club_formation=clean_text,
        home_club_name=clean_text,
        away_club_name=clean_text,
        aggregate=clean_text,
        competition_type=clean_text,
    ),
    "appearances": _map(
        appearance_id=clean_text,
        game_id=clean_int,
        player_id=clean_int,
        player_club_id=clean_int,
        player_current_club_id=clean_int,
        date=clean_date,
        player_name=clean_text,
        competition_id=clean_text,
        yellow_cards=clean_int,
        red_cards=clean_int,
        goals=clean_int,
        assists=clean_int,
        minutes_played=clean_int,
    ),
    "transfers": _map(
        player_id=clean_int,
        transfer_date=clean_date,
        transfer_season=clean_text,
        from_club_id=clean_int,
        to_club_id=clean_int,
        from_club_name=clean_text,
        to_club_name=clean_text,
        transfer_fee=clean_currency,
        market_value_in_eur=clean_currency,
        player_name=clean_text,
    ),
    "game_events": _map(
        game_event_id=clean_text,
        game_id=clean_int,
        minute=clean_int,
        type=clean_text,
        club_id=clean_int,
        player_id=clean_int,
        description=clean_text,
    ),
}

_PRIMARY_KEYS: dict[str, str] = {
    Competition.__tablename__: "competition_id",
    Club.__tablename__: "club_id",
    Player.__tablename__: "player_id",
    Game.__tablename__: "game_id",
    Appearance.__tablename__: "appearance_id",
    GameEvent.__tablename__: "game_event_id",
}


def read_csv(path: Path) -> Iterator[dict[str, str]]:
    """Yield rows as dicts keyed by the header; blank lines are skipped."""
    with path.open(newline="", encoding="utf-8") as fh:
        for row in csv.DictReader(fh):
            if any(v and v.strip() for v in row.values() if isinstance(v, str)):
                yield row


def map_rows(table: str, rows: Iterable[dict[str, str]]) -> Iterator[dict[str, Any]]:
    """Clean raw CSV rows; rows without their natural key are dropped."""
    mapper = MAPPERS[table]
    key = _PRIMARY_KEYS.get(table)
    for raw in rows:
        mapped = mapper(raw)
        if key is None or mapped[key] is not None:
            yield mapped


def _batches(rows: Iterable[dict[str, Any]], size: int) -> Iterator[list[dict[str, Any]]]:
    batch: list[dict[str, Any]] = []
    for row in rows:
        batch.append(row)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def _insert_ignoring_conflicts(engine: AsyncEngine, model: type[Base]) -> Any:
    if engine.dialect.name == "postgresql":
        return pg_insert(model).on_conflict_do_nothing()
    if engine.dialect.name == "sqlite":
        return sqlite_insert(model).on_conflict_do_nothing()
    msg = f"Unsupported dialect for dataset loading: {engine.dialect.name}"
    raise ValueError(msg)


async def insert_rows(
    engine: AsyncEngine,
    model: type[Base],
    rows: Iterable[dict[str, Any]],
    batch_size: int = BATCH_SIZE,
) -> tuple[int, int]:
    """Insert rows batch by batch. Returns ``(rows_sent, failed_batches)``."""
    table = model.__tablename__
    stmt = _insert_ignoring_conflicts(engine, model)
    sent = 0
    failed = 0
    for index, batch in enumerate(_batches(rows, batch_size)):
        try:
            async with engine.begin() as conn:
                await conn.execute(stmt, batch)
        except SQLAlchemyError as e:
            failed += 1
            logger.error("dataset_batch_failed", table=table, batch=index, rows=len(batch), error=str(e))
            continue
        sent += len(batch)
        logger.info("dataset_batch_loaded", table=table, batch=index, total=sent)
    return sent, failed


async def prepare_tables(engine: AsyncEngine, rebuild: bool = False, sandbox_role: str | None = None) -> None:
    """Create the dataset tables; with ``rebuild`` drop them first.

    On PostgreSQL ``sandbox_role`` (which must already exist) is granted SELECT
    on every dataset table, since a rebuild drops the earlier grants.
    """
    tables = [m.__table__ for m in DATASET_MODELS]
    async with engine.begin() as conn:
        if rebuild:
            await conn.run_sync(lambda sync_conn: Base.metadata.drop_all(sync_conn, tables=list(reversed(tables))))
        await conn.run_sync(lambda sync_conn: Base.metadata.create_all(sync_conn, tables=tables))
        if sandbox_role and engine.dialect.name == "postgresql":
            await grant_dataset_access(conn, sandbox_role, [t.name for t in tables])


async def load_dataset(
    engine: AsyncEngine,
    csv_dir: Path,
    rebuild: bool = False,
    sandbox_role: str | None = None,
) -> dict[str, int]:
    """Load every ``<table>.csv`` found in ``csv_dir``. Returns rows sent per table."""
    await prepare_tables(engine, rebuild=rebuild, sandbox_role=sandbox_role)
    loaded: dict[str, int] = {}
    for model in DATASET_MODELS:
        table = model.__tablename__
        path = csv_dir / f"{table}.csv"
        if not path.exists():
            logger.warning("dataset_file_missing", table=table, path=str(path))
            continue
        sent, failed = await insert_rows(engine, model, map_rows(table, read_csv(path)))
        loaded[table] = sent
        logger.info("dataset_table_loaded", table=table, rows=sent, failed_batches=failed)
    return loaded


async def _run(csv_dir: Path, rebuild: bool) -> None:
    from footballiq.config import get_settings
    from footballiq.database import Database
    from footballiq.middleware.logging import setup_logging

    settings = get_settings()
    setup_logging(settings)
    database = Database.from_url(settings.database_url, settings.dataset_database_url)
    try:
        await load_dataset(database.dataset_engine, csv_dir, rebuild=rebuild, sandbox_role=settings.sandbox_role)
    finally:
        await database.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Load the football CSV dataset into the SQL sandbox database.")
    parser.add_argument("csv_dir", type=Path, help="directory holding competitions.csv, clubs.csv, ...")
    parser.add_argument("--rebuild", action="store_true", help="drop and recreate the dataset tables first")
    args = parser.parse_args(argv)
    if not args.csv_dir.is_dir():
        parser.error(f"not a directory: {args.csv_dir}")
    asyncio.run(_run(args.csv_dir, args.rebuild))


if __name__ == "__main__":
    main()
