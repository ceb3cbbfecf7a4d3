"""
Pytest configuration and shared fixtures for standings tests.
"""

import pytest

from standings.models.enums import Conference, GameResult
from standings.models.team import SeedTeam

V = GameResult.WIN
D = GameResult.LOSS


@pytest.fixture
def seed_teams():
    """A small seed table with one team per conference plus a lookalike."""
    return [
        SeedTeam(
            name="Boston Celtics",
            logo="https://a.espncdn.com/i/teamlogos/nba/500/bos.png",
            conference=Conference.EAST,
        ),
        SeedTeam(
            name="Los Angeles Lakers",
            logo="https://a.espncdn.com/i/teamlogos/nba/500/lal.png",
            record=[V, V, D, D, V],
            wins=3,
            losses=2,
            conference=Conference.WEST,
        ),
        SeedTeam(
            name="Denver Nuggets",
            logo="https://a.espncdn.com/i/teamlogos/nba/500/den.png",
            wins=5,
            losses=1,
            conference=Conference.WEST,
        ),
    ]


@pytest.fixture
def sample_db_rows():
    """Rows as they come back from the teams table."""
    return [
        {"id": 7, "name": "Celtics", "wins": 30, "losses": 10},
        {"id": 8, "nome": "Lakers", "wins": 25, "losses": 15, "record": ["V", "D", "V", "D", "V"]},
        {"id": 9, "name": "Nuggets", "wins": None, "losses": None, "record": []},
    ]


@pytest.fixture
def sample_feed_rows():
    """Feed rows with the inconsistent column names seen in the wild."""
    return [
        {"time": "Celtics", "v": 31, "d": 9, "pts": 118.2, "pts_contra": 109.5, "pct_vit": 0.775, "ultimos_5": "W3"},
        {"nome": "Los Angeles Lakers", "vitorias": "26", "derrotas": "14", "PCT": 0.65, "strk": "V-D-V-V-D"},
        {"equipe": "Nuggets", "wins": 28, "losses": 12, "aproveitamento": 0.7, "last_5": "L2"},
    ]
