"""Multiple-choice SQL quiz: a football question, the SQL that answers it, four options."""

from __future__ import annotations

from dataclasses import dataclass

ANSWER_LETTERS: tuple[str, ...] = ("A", "B", "C", "D")


@dataclass(frozen=True)
class QuizChallenge:
    id: int
    difficulty: str
    points: int
    category: str
    table: str
    question: str
    query: str
    options: tuple[str, ...]
    correct_answer: str
    explanation: str


def _quiz(
    id: int,
    difficulty: str,
    category: str,
    table: str,
    question: str,
    query: str,
    options: tuple[str, str, str, str],
    correct_answer: str,
    explanation: str,
) -> QuizChallenge:
    points = {"basic": 10, "medium": 25, "hard": 50}[difficulty]
    return QuizChallenge(id, difficulty, points, category, table, question, query, options, correct_answer, explanation)


QUIZ_CHALLENGES: tuple[QuizChallenge, ...] = (
    # --- basic ---
    _quiz(
        1, "basic", "Players", "players",
        "How many players are registered in the database?",
        "SELECT COUNT(*) AS total_players FROM players;",
        ("A) Around 10,000", "B) Around 25,000", "C) Around 50,000", "D) Around 100,000"),
        "B",
        "The players table contains approximately 25,000 professional football players from top leagues.",
    ),
    _quiz(
        2, "basic", "Players", "players",
        "How many left-footed players are in the database?",
        "SELECT COUNT(*) AS left_footed\nFROM players\nWHERE foot = 'Left';",
        ("A) Less than 1,000", "B) Between 1,000 and 3,000", "C) Between 3,000 and 6,000", "D) More than 6,000"),
        "C",
        "Approximately 20-25% of players are left-footed, which is around 4,000-5,000 players.",
    ),
    _quiz(
        3, "basic", "Clubs", "clubs",
        "How many clubs have a squad size larger than 30 players?",
        "SELECT COUNT(*) AS big_squads\nFROM clubs\nWHERE squad_size > 30;",
        ("A) Less than 50", "B) Between 50 and 150", "C) Between 150 and 300", "D) More than 300"),
        "C",
        "Many top clubs maintain large squads for depth, with over 200 clubs having 30+ players.",
    ),
    _quiz(
        4, "basic", "Competitions", "competitions",
        "How many domestic leagues are registered in the system?",
        "SELECT COUNT(*) AS domestic_leagues\nFROM competitions\nWHERE type = 'domestic_league';",
        ("A) 10-20 leagues", "B) 20-40 leagues", "C) 40-60 leagues", "D) More than 60 leagues"),
        "B",
        "The database includes top domestic leagues from Europe, Americas, and Asia.",
    ),
    _quiz(
        5, "basic", "Games", "games",
        "How many matches ended with the home team scoring more than 5 goals?",
        "SELECT COUNT(*) AS high_scoring_home\nFROM games\nWHERE home_club_goals > 5;",
        ("A) Less than 100", "B) Between 100 and 500", "C) Between 500 and 1,500", "D) More than 1,500"),
        "C",
        "High-scoring home wins (6+ goals) are relatively rare but do occur in several hundred matches.",
    ),
    _quiz(
        6, "basic", "Transfers", "transfers",
        "What was the highest transfer fee ever paid for a single player (in EUR)?",
        "SELECT player_name, transfer_fee\nFROM transfers\nWHERE transfer_fee IS NOT NULL\n"
        "ORDER BY transfer_fee DESC\nLIMIT 1;",
        ("A) Around €100 million", "B) Around €150 million", "C) Around €200 million", "D) Around €250 million"),
        "C",
        "The record transfer fee is around €200-220 million (Neymar to PSG in 2017).",
    ),
    _quiz(
        7, "basic", "Appearances", "appearances",
        "How many hat-tricks (3+ goals in a match) have been scored?",
        "SELECT COUNT(*) AS hat_tricks\nFROM appearances\nWHERE goals >= 3;",
        ("A) Less than 500", "B) Between 500 and 1,500", "C) Between 1,500 and 3,000", "D) More than 3,000"),
        "C",
        "Hat-tricks are special achievements, with around 2,000 recorded across all competitions.",
    ),
    # --- medium ---
    _quiz(
        8, "medium", "Players", "players",
        "Which country has the most players in the database?",
        "SELECT country_of_citizenship, COUNT(*) AS player_count\nFROM players\n"
        "GROUP BY country_of_citizenship\nORDER BY player_count DESC\nLIMIT 1;",
        ("A) Brazil", "B) England", "C) Spain", "D) Germany"),
        "B",
        "England has the most registered players due to the extensive English football pyramid.",
    ),
    _quiz(
        9, "medium", "Clubs", "clubs",
        "What is the average squad size across all clubs in the Premier League (GB1)?",
        "SELECT ROUND(AVG(squad_size), 1) AS avg_squad\nFROM clubs\nWHERE domestic_competition_id = 'GB1';",
        ("A) Around 22-24 players", "B) Around 25-27 players", "C) Around 28-30 players", "D) Around 31-33 players"),
        "B",
        "Premier League clubs typically maintain squads of 25-27 players for squad registration rules.",
    ),
    _quiz(
        10, "medium", "Appearances", "appearances",
        "How many players have scored more than 100 career goals (in the database)?",
        "SELECT COUNT(*) FROM (\n    SELECT player_id, SUM(goals) AS total_goals\n    FROM appearances\n"
        "    GROUP BY player_id\n    HAVING SUM(goals) > 100\n) AS centurions;",
        ("A) Less than 20", "B) Between 20 and 50", "C) Between 50 and 100", "D) More than 100"),
        "C",
        "Around 70-80 players have achieved over 100 goals across their careers in top leagues.",
    ),
    _quiz(
        11, "medium", "Transfers", "transfers",
        "Which club has spent the most money on incoming transfers (total)?",
        "SELECT to_club_name, SUM(transfer_fee) AS total_spent\nFROM transfers\nWHERE transfer_fee IS NOT NULL\n"
        "GROUP BY to_club_name\nORDER BY total_spent DESC\nLIMIT 1;",
        ("A) Manchester City", "B) Paris Saint-Germain", "C) Chelsea", "D) Real Madrid"),
        "A",
        "Manchester City has the highest total transfer spending in football history.",
    ),
    _quiz(
        12, "medium", "Games", "games",
        "Which stadium has the highest average attendance?",
        "SELECT stadium, ROUND(AVG(attendance), 0) AS avg_attendance\nFROM games\nWHERE attendance > 0\n"
        "GROUP BY stadium\nORDER BY avg_attendance DESC\nLIMIT 1;",
        (
            "A) Camp Nou (Barcelona)",
            "B) Signal Iduna Park (Dortmund)",
            "C) Old Trafford (Man United)",
            "D) Santiago Bernabéu (Real Madrid)",
        ),
        "B",
        "Borussia Dortmund's Signal Iduna Park consistently has the highest average attendance "
        "in European football.",
    ),
    _quiz(
        13, "medium", "Competitions", "competitions",
        "Which confederation (UEFA, CONMEBOL, etc.) has the most registered competitions?",
        "SELECT confederation, COUNT(*) AS num_competitions\nFROM competitions\n"
        "GROUP BY confederation\nORDER BY num_competitions DESC\nLIMIT 1;",
        ("A) UEFA (Europe)", "B) CONMEBOL (South America)", "C) CONCACAF (North America)", "D) AFC (Asia)"),
        "A",
        "UEFA has the most competitions due to numerous domestic leagues and cups across European countries.",
    ),
    _quiz(
        14, "medium", "Game Events", "game_events",
        "What type of event occurs most frequently in matches?",
        "SELECT type, COUNT(*) AS event_count\nFROM game_events\nGROUP BY type\nORDER BY event_count DESC\nLIMIT 1;",
        ("A) Goals", "B) Substitutions", "C) Yellow Cards", "D) Red Cards"),
        "B",
        "Substitutions are the most common event with 3-5 per team per match (6-10 per game).",
    ),
    # --- hard ---
    _quiz(
        15, "hard", "Players", "players",
        "What percentage of players have a market value above the average?",
        "SELECT\n    ROUND(\n        COUNT(CASE WHEN market_value_in_eur > (\n"
        "            SELECT AVG(market_value_in_eur) FROM players WHERE market_value_in_eur > 0\n"
        "        ) THEN 1 END) * 100.0 / COUNT(*), 1\n    ) AS pct_above_avg\n"
        "FROM players\nWHERE market_value_in_eur > 0;",
        ("A) Around 15-20%", "B) Around 25-35%", "C) Around 40-50%", "D) Around 55-65%"),
        "B",
        "Due to skewed distribution (few superstars), only about 30% of players are above average value.",
    ),
    _quiz(
        16, "hard", "Appearances", "appearances",
        "Among players with 50+ appearances, who has the best goals-per-game ratio?",
        "SELECT player_name,\n       COUNT(*) AS appearances,\n       SUM(goals) AS total_goals,\n"
        "       ROUND(SUM(goals) * 1.0 / COUNT(*), 2) AS goals_per_game\nFROM appearances\n"
        "GROUP BY player_id, player_name\nHAVING COUNT(*) >= 50\nORDER BY goals_per_game DESC\nLIMIT 1;",
        ("A) Lionel Messi", "B) Robert Lewandowski", "C) Cristiano Ronaldo", "D) Erling Haaland"),
        "D",
        "Erling Haaland has the best goals-per-game ratio among active players with 50+ appearances.",
    ),
    _quiz(
        17, "hard", "Competitions & Games", "competitions,games",
        "Which league has the highest average goals per game?",
        "SELECT c.name AS competition_name,\n"
        "       ROUND(AVG(g.home_club_goals + g.away_club_goals), 2) AS avg_goals_per_game\n"
        "FROM competitions c\nJOIN games g ON c.competition_id = g.competition_id\n"
        "GROUP BY c.competition_id, c.name\nHAVING COUNT(g.game_id) > 100\n"
        "ORDER BY avg_goals_per_game DESC\nLIMIT 1;",
        ("A) Bundesliga (Germany)", "B) Premier League (England)", "C) La Liga (Spain)", "D) Eredivisie (Netherlands)"),
        "A",
        "The Bundesliga consistently has the highest goals-per-game average among top 5 leagues.",
    ),
    _quiz(
        18, "hard", "Transfers", "transfers",
        "Which transfer season had the highest total spending worldwide?",
        "SELECT transfer_season,\n       COUNT(*) AS num_transfers,\n       SUM(transfer_fee) AS total_spent\n"
        "FROM transfers\nWHERE transfer_fee > 0\nGROUP BY transfer_season\nORDER BY total_spent DESC\nLIMIT 1;",
        ("A) Summer 2017", "B) Summer 2019", "C) Summer 2021", "D) Summer 2023"),
        "B",
        "The 2019 summer window saw record-breaking spending before the COVID-19 pandemic.",
    ),
    _quiz(
        19, "hard", "Players & Clubs", "players,clubs",
        "Which club has the highest total squad market value?",
        "SELECT c.name AS club_name,\n       SUM(p.market_value_in_eur) AS total_squad_value\n"
        "FROM clubs c\nJOIN players p ON c.club_id = p.current_club_id\nWHERE p.market_value_in_eur > 0\n"
        "GROUP BY c.club_id, c.name\nORDER BY total_squad_value DESC\nLIMIT 1;",
        ("A) Manchester City", "B) Real Madrid", "C) Paris Saint-Germain", "D) Chelsea"),
        "A",
        "Manchester City has the most valuable squad with combined value exceeding €1 billion.",
    ),
    _quiz(
        20, "hard", "Appearances", "appearances",
        "Which player has received the most total cards (yellow + red) in the database?",
        "SELECT player_name,\n       SUM(yellow_cards) AS total_yellows,\n       SUM(red_cards) AS total_reds,\n"
        "       SUM(yellow_cards) + SUM(red_cards) AS total_cards\nFROM appearances\n"
        "GROUP BY player_id, player_name\nORDER BY total_cards DESC\nLIMIT 1;",
        ("A) Sergio Ramos", "B) Pepe", "C) Diego Costa", "D) Nigel de Jong"),
        "A",
        "Sergio Ramos holds the record for most cards received in top European competitions.",
    ),
    _quiz(
        21, "hard", "Games", "games",
        "What is the overall home win percentage across all matches?",
        "SELECT\n    ROUND(\n        SUM(CASE WHEN home_club_goals > away_club_goals THEN 1 ELSE 0 END) * 100.0 / COUNT(*),\n"
        "        1\n    ) AS home_win_pct\nFROM games;",
        ("A) Around 35-40%", "B) Around 42-47%", "C) Around 48-53%", "D) Around 55-60%"),
        "B",
        "Home teams win approximately 45% of matches, with about 25% draws and 30% away wins.",
    ),
    _quiz(
        22, "hard", "Games", "games",
        "What was the highest combined score in a single match?",
        "SELECT home_club_name, away_club_name,\n       home_club_goals, away_club_goals,\n"
        "       (home_club_goals + away_club_goals) AS total_goals\nFROM games\n"
        "ORDER BY total_goals DESC\nLIMIT 1;",
        ("A) 9 goals (like 7-2)", "B) 10-11 goals", "C) 12-13 goals", "D) 14+ goals"),
        "C",
        "Some matches have ended with 12-13 combined goals, often in cup competitions.",
    ),
    _quiz(
        23, "medium", "Players", "players",
        "What percentage of players are under 25 years old?",
        "SELECT\n    ROUND(\n        COUNT(CASE WHEN EXTRACT(YEAR FROM AGE(CURRENT_DATE, date_of_birth)) < 25 THEN 1 END)"
        " * 100.0 / COUNT(*),\n        1\n    ) AS pct_under_25\nFROM players\nWHERE date_of_birth IS NOT NULL;",
        ("A) Around 20-30%", "B) Around 35-45%", "C) Around 50-60%", "D) Around 65-75%"),
        "B",
        "About 40% of professional players are under 25, with peak age being 24-29.",
    ),
    _quiz(
        24, "hard", "Transfers", "transfers",
        "Which club has made the most money from selling players (total)?",
        "SELECT from_club_name, SUM(transfer_fee) AS total_received\nFROM transfers\n"
        "WHERE transfer_fee IS NOT NULL AND transfer_fee > 0\nGROUP BY from_club_name\n"
        "ORDER BY total_received DESC\nLIMIT 1;",
        ("A) Benfica", "B) Monaco", "C) Ajax", "D) Sporting CP"),
        "A",
        "Benfica has made the most money from player sales due to their excellent youth development.",
    ),
    _quiz(
        25, "medium", "Appearances", "appearances",
        "Who has the most career assists in the database?",
        "SELECT player_name, SUM(assists) AS total_assists\nFROM appearances\n"
        "GROUP BY player_id, player_name\nORDER BY total_assists DESC\nLIMIT 1;",
        ("A) Kevin De Bruyne", "B) Lionel Messi", "C) Thomas Müller", "D) Angel Di Maria"),
        "C",
        'Thomas Müller is known as the "assist king" with the most assists in Bundesliga history.',
    ),
)

_BY_ID: dict[int, QuizChallenge] = {c.id: c for c in QUIZ_CHALLENGES}


def get_quiz_challenge(challenge_id: int) -> QuizChallenge | None:
    return _BY_ID.get(challenge_id)
