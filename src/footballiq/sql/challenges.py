"""Write-your-own-SQL challenge catalogue.

Each challenge carries a reference query (portable between PostgreSQL and
SQLite) and a predicate over the user's result rows used by
:func:`footballiq.sql.grading.grade_submission`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from footballiq.sql.grading import ResultPredicate, Row

CHALLENGE_DIFFICULTIES: tuple[str, ...] = ("basic", "medium", "hard")


@dataclass(frozen=True)
class QueryChallenge:
    id: int
    difficulty: str
    points: int
    category: str
    table: str
    title: str
    description: str
    hint: str
    expected_query: str
    validate: ResultPredicate


# --- Predicates ---


def _number(row: Row, column: str) -> float | None:
    value = row.get(column)
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _non_empty(rows: Sequence[Row]) -> bool:
    return len(rows) > 0


def _exactly(n: int) -> ResultPredicate:
    return lambda rows: len(rows) == n


def _first_row_has(column: str, count: int | None = None) -> ResultPredicate:
    def check(rows: Sequence[Row]) -> bool:
        if not rows or (count is not None and len(rows) != count):
            return False
        return column in rows[0]

    return check


def _every(test: Callable[[Row], bool]) -> ResultPredicate:
    return lambda rows: all(test(r) for r in rows)


def _above(column: str, threshold: float, *, inclusive: bool = False) -> Callable[[Row], bool]:
    def check(row: Row) -> bool:
        value = _number(row, column)
        if value is None:
            return False
        return value >= threshold if inclusive else value > threshold

    return check


def _total_goals_at_least(threshold: int) -> Callable[[Row], bool]:
    def check(row: Row) -> bool:
        home = _number(row, "home_club_goals")
        away = _number(row, "away_club_goals")
        return home is not None and away is not None and home + away >= threshold

    return check


def _top_scorers_with_appearances(rows: Sequence[Row]) -> bool:
    return len(rows) == 10 and all(_above("appearances", 50, inclusive=True)(r) for r in rows)


QUERY_CHALLENGES: tuple[QueryChallenge, ...] = (
    # --- basic (10 points) ---
    QueryChallenge(
        id=101,
        difficulty="basic",
        points=10,
        category="Players",
        table="players",
        title="Count All Players",
        description="Write a query to count the total number of players in the database.",
        hint="Use COUNT(*) to count all rows.",
        expected_query="SELECT COUNT(*) AS total_players FROM players;",
        validate=_first_row_has("total_players", count=1),
    ),
    QueryChallenge(
        id=102,
        difficulty="basic",
        points=10,
        category="Clubs",
        table="clubs",
        title="List Premier League Clubs",
        description=(
            'Find all clubs that play in the English Premier League (domestic_competition_id = "GB1"). '
            "Show their name and stadium."
        ),
        hint="Use WHERE to filter by domestic_competition_id.",
        expected_query="SELECT name, stadium_name FROM clubs WHERE domestic_competition_id = 'GB1';",
        validate=_first_row_has("name"),
    ),
    QueryChallenge(
        id=103,
        difficulty="basic",
        points=10,
        category="Games",
        table="games",
        title="High Scoring Games",
        description=(
            "Find all games where the total goals scored (home + away) was 7 or more. "
            "Show both team names and their goals."
        ),
        hint="Use WHERE with home_club_goals + away_club_goals >= 7",
        expected_query=(
            "SELECT home_club_name, away_club_name, home_club_goals, away_club_goals\n"
            "FROM games\n"
            "WHERE home_club_goals + away_club_goals >= 7;"
        ),
        validate=_every(_total_goals_at_least(7)),
    ),
    QueryChallenge(
        id=104,
        difficulty="basic",
        points=10,
        category="Competitions",
        table="competitions",
        title="UEFA Competitions",
        description="List all competitions organized by UEFA. Show the competition name and country.",
        hint='Filter by confederation = "europa"',
        expected_query="SELECT name, country_name FROM competitions WHERE confederation = 'europa';",
        validate=_non_empty,
    ),
    QueryChallenge(
        id=105,
        difficulty="basic",
        points=10,
        category="Transfers",
        table="transfers",
        title="Top 10 Expensive Transfers",
        description="Find the 10 most expensive transfers ever. Show player name, clubs involved, and the fee.",
        hint="Use ORDER BY transfer_fee DESC LIMIT 10",
        expected_query=(
            "SELECT player_name, from_club_name, to_club_name, transfer_fee\n"
            "FROM transfers\n"
            "WHERE transfer_fee IS NOT NULL\n"
            "ORDER BY transfer_fee DESC\n"
            "LIMIT 10;"
        ),
        validate=_exactly(10),
    ),
    # --- medium (25 points) ---
    QueryChallenge(
        id=201,
        difficulty="medium",
        points=25,
        category="Players",
        table="players",
        title="Players by Country",
        description=(
            "Count how many players are from each country. Show the top 10 countries with the most players."
        ),
        hint="Use GROUP BY country_of_citizenship and ORDER BY the count.",
        expected_query=(
            "SELECT country_of_citizenship, COUNT(*) AS player_count\n"
            "FROM players\n"
            "GROUP BY country_of_citizenship\n"
            "ORDER BY player_count DESC\n"
            "LIMIT 10;"
        ),
        validate=_first_row_has("player_count", count=10),
    ),
    QueryChallenge(
        id=202,
        difficulty="medium",
        points=25,
        category="Appearances",
        table="appearances",
        title="Top Goal Scorers",
        description="Find players with more than 50 career goals. Show their name and total goals, sorted by goals.",
        hint="Use GROUP BY, SUM(goals), and HAVING.",
        expected_query=(
            "SELECT player_name, SUM(goals) AS total_goals\n"
            "FROM appearances\n"
            "GROUP BY player_id, player_name\n"
            "HAVING SUM(goals) > 50\n"
            "ORDER BY total_goals DESC;"
        ),
        validate=_every(_above("total_goals", 50)),
    ),
    QueryChallenge(
        id=203,
        difficulty="medium",
        points=25,
        category="Clubs",
        table="clubs",
        title="Average Squad Size by League",
        description=(
            "Calculate the average squad size for each domestic competition. Order by average size descending."
        ),
        hint="Use AVG(squad_size) with GROUP BY domestic_competition_id.",
        expected_query=(
            "SELECT domestic_competition_id, ROUND(AVG(squad_size), 1) AS avg_squad_size\n"
            "FROM clubs\n"
            "GROUP BY domestic_competition_id\n"
            "ORDER BY avg_squad_size DESC;"
        ),
        validate=_first_row_has("avg_squad_size"),
    ),
    QueryChallenge(
        id=204,
        difficulty="medium",
        points=25,
        category="Games",
        table="games",
        title="Highest Attendance Stadiums",
        description=(
            "Find the 10 stadiums with the highest average attendance. Only include stadiums with attendance > 0."
        ),
        hint="Use AVG(attendance), GROUP BY stadium, filter with WHERE.",
        expected_query=(
            "SELECT stadium, ROUND(AVG(attendance), 0) AS avg_attendance\n"
            "FROM games\n"
            "WHERE attendance > 0\n"
            "GROUP BY stadium\n"
            "ORDER BY avg_attendance DESC\n"
            "LIMIT 10;"
        ),
        validate=_exactly(10),
    ),
    QueryChallenge(
        id=205,
        difficulty="medium",
        points=25,
        category="Transfers",
        table="transfers",
        title="Big Spending Clubs",
        description="Find clubs that spent more than €100 million total on incoming transfers.",
        hint="Group by to_club_name and use HAVING with SUM(transfer_fee).",
        expected_query=(
            "SELECT to_club_name, SUM(transfer_fee) AS total_spent\n"
            "FROM transfers\n"
            "WHERE transfer_fee > 0\n"
            "GROUP BY to_club_name\n"
            "HAVING SUM(transfer_fee) > 100000000\n"
            "ORDER BY total_spent DESC;"
        ),
        validate=_every(_above("total_spent", 100_000_000)),
    ),
    QueryChallenge(
        id=206,
        difficulty="medium",
        points=25,
        category="Game Events",
        table="game_events",
        title="Event Type Distribution",
        description="Count how many times each event type occurred. Show type and count, ordered by count.",
        hint="GROUP BY type and use COUNT(*).",
        expected_query=(
            "SELECT type, COUNT(*) AS event_count\n"
            "FROM game_events\n"
            "GROUP BY type\n"
            "ORDER BY event_count DESC;"
        ),
        validate=_first_row_has("event_count"),
    ),
    # --- hard (50 points) ---
    QueryChallenge(
        id=301,
        difficulty="hard",
        points=50,
        category="Players",
        table="players",
        title="Above Average Value",
        description=(
            "Find all players whose market value is above the average market value. "
            "Show name and value, sorted by value."
        ),
        hint="Use a subquery to calculate the average, then filter in the main query.",
        expected_query=(
            "SELECT name, market_value_in_eur\n"
            "FROM players\n"
            "WHERE market_value_in_eur > (\n"
            "    SELECT AVG(market_value_in_eur) FROM players WHERE market_value_in_eur > 0\n"
            ")\n"
            "ORDER BY market_value_in_eur DESC;"
        ),
        validate=_non_empty,
    ),
    QueryChallenge(
        id=302,
        difficulty="hard",
        points=50,
        category="Appearances",
        table="appearances",
        title="Goals Per Game Leaders",
        description=(
            "Find the top 10 players by goals-per-game ratio. Only include players with at least 50 appearances."
        ),
        hint="Calculate SUM(goals)/COUNT(*), use HAVING for minimum appearances.",
        expected_query=(
            "SELECT player_name, COUNT(*) AS appearances, SUM(goals) AS total_goals,\n"
            "       ROUND(SUM(goals) * 1.0 / COUNT(*), 2) AS goals_per_game\n"
            "FROM appearances\n"
            "GROUP BY player_id, player_name\n"
            "HAVING COUNT(*) >= 50\n"
            "ORDER BY goals_per_game DESC\n"
            "LIMIT 10;"
        ),
        validate=_top_scorers_with_appearances,
    ),
    QueryChallenge(
        id=303,
        difficulty="hard",
        points=50,
        category="Competitions & Games",
        table="competitions,games",
        title="Highest Scoring Leagues",
        description=(
            "Find the 5 competitions with the highest average goals per game. "
            "Show competition name and goals per game."
        ),
        hint="JOIN competitions and games, calculate (home_goals + away_goals) / COUNT(games).",
        expected_query=(
            "SELECT c.name,\n"
            "       ROUND(SUM(g.home_club_goals + g.away_club_goals) * 1.0 / COUNT(g.game_id), 2)"
            " AS goals_per_game\n"
            "FROM competitions c\n"
            "JOIN games g ON c.competition_id = g.competition_id\n"
            "GROUP BY c.competition_id, c.name\n"
            "ORDER BY goals_per_game DESC\n"
            "LIMIT 5;"
        ),
        validate=_exactly(5),
    ),
    QueryChallenge(
        id=304,
        difficulty="hard",
        points=50,
        category="Players & Clubs",
        table="players,clubs",
        title="Club Value Analysis",
        description="Find the 10 clubs with the highest total player market value. Show club name and total value.",
        hint="JOIN players and clubs, SUM the market values, GROUP BY club.",
        expected_query=(
            "SELECT c.name, SUM(p.market_value_in_eur) AS total_value\n"
            "FROM clubs c\n"
            "JOIN players p ON c.club_id = p.current_club_id\n"
            "WHERE p.market_value_in_eur > 0\n"
            "GROUP BY c.club_id, c.name\n"
            "ORDER BY total_value DESC\n"
            "LIMIT 10;"
        ),
        validate=_exactly(10),
    ),
    QueryChallenge(
        id=305,
        difficulty="hard",
        points=50,
        category="Games",
        table="games",
        title="Home Advantage Analysis",
        description=(
            "Calculate home win percentage for teams with at least 20 home games. "
            "Show team name, games, wins, and win %."
        ),
        hint="Use CASE WHEN to count wins, calculate percentage, use HAVING.",
        expected_query=(
            "SELECT home_club_name,\n"
            "       COUNT(*) AS home_games,\n"
            "       SUM(CASE WHEN home_club_goals > away_club_goals THEN 1 ELSE 0 END) AS home_wins,\n"
            "       ROUND(SUM(CASE WHEN home_club_goals > away_club_goals THEN 1 ELSE 0 END) * 100.0"
            " / COUNT(*), 1) AS win_pct\n"
            "FROM games\n"
            "GROUP BY home_club_id, home_club_name\n"
            "HAVING COUNT(*) >= 20\n"
            "ORDER BY win_pct DESC;"
        ),
        validate=_every(_above("home_games", 20, inclusive=True)),
    ),
    QueryChallenge(
        id=306,
        difficulty="hard",
        points=50,
        category="Transfers",
        table="transfers",
        title="Transfer Season Analysis",
        description=(
            "Analyze transfer spending by season. Show season, number of transfers, total spent, "
            "and largest single transfer."
        ),
        hint="GROUP BY transfer_season, use COUNT, SUM, and MAX.",
        expected_query=(
            "SELECT transfer_season,\n"
            "       COUNT(*) AS num_transfers,\n"
            "       SUM(transfer_fee) AS total_spent,\n"
            "       MAX(transfer_fee) AS biggest_transfer\n"
            "FROM transfers\n"
            "WHERE transfer_fee > 0\n"
            "GROUP BY transfer_season\n"
            "ORDER BY total_spent DESC;"
        ),
        validate=_non_empty,
    ),
)

_BY_ID: dict[int, QueryChallenge] = {c.id: c for c in QUERY_CHALLENGES}


def get_query_challenge(challenge_id: int) -> QueryChallenge | None:
    return _BY_ID.get(challenge_id)


def filter_by_difficulty(items: Iterable[Any], difficulty: str | None) -> list[Any]:
    """Keep items of one difficulty; an unknown or missing filter keeps everything."""
    items = list(items)
    if difficulty in CHALLENGE_DIFFICULTIES:
        return [i for i in items if i.difficulty == difficulty]
    return items


def count_by_difficulty(items: Iterable[Any]) -> dict[str, int]:
    counts = dict.fromkeys(CHALLENGE_DIFFICULTIES, 0)
    for item in items:
        if item.difficulty in counts:
            counts[item.difficulty] += 1
    return counts
