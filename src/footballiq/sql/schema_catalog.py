"""Describe the football dataset tables for the SQL workshop.

Column lists come from the ORM mapping in ``footballiq.dataset.models`` so the
description cannot drift from the tables the sandbox actually queries.
"""

from __future__ import annotations

from footballiq.dataset.models import DATASET_MODELS

TABLE_DESCRIPTIONS: dict[str, str] = {
    "competitions": "Leagues and tournaments",
    "clubs": "Football clubs",
    "players": "Football player information",
    "games": "Match results",
    "appearances": "Player stats per game",
    "transfers": "Player transfers",
    "game_events": "In-game events (goals, cards, etc)",
}

# Surrogate keys that carry no football meaning.
_HIDDEN_COLUMNS: dict[str, set[str]] = {"transfers": {"id"}}


def dataset_schema() -> list[dict[str, object]]:
    tables = []
    for model in DATASET_MODELS:
        table = model.__table__
        hidden = _HIDDEN_COLUMNS.get(table.name, set())
        tables.append(
            {
                "name": table.name,
                "description": TABLE_DESCRIPTIONS.get(table.name, ""),
                "columns": [c.name for c in table.columns if c.name not in hidden],
            }
        )
    return tables
