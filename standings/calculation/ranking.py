# standings/calculation/ranking.py
from functools import cmp_to_key
from typing import Iterable, List, Sequence

from standings.models.enums import GameResult
from standings.models.feed import FeedMetric
from standings.models.team import MergedTeam

# Two feed win percentages closer than this are considered equal
PCT_EPSILON = 0.0001


def momentum_score(record: Sequence[GameResult]) -> int:
    """Recency-weighted win count: a win at position i is worth 2**i."""
    return sum(2**i for i, result in enumerate(record) if result == GameResult.WIN)


def _win_pct(team: MergedTeam) -> float:
    return team.stats.aproveitamento if team.stats is not None else 0.0


def compare_teams(a: MergedTeam, b: MergedTeam) -> float:
    """Orders teams by momentum, then wins, then feed win percentage, all descending."""
    momentum_diff = momentum_score(b.record) - momentum_score(a.record)
    if momentum_diff != 0:
        return momentum_diff
    if b.wins != a.wins:
        return b.wins - a.wins
    return _win_pct(b) - _win_pct(a)


def rank_teams(teams: Iterable[MergedTeam]) -> List[MergedTeam]:
    """Returns a new list of teams in standings order. The sort is stable."""
    return sorted(teams, key=cmp_to_key(compare_teams))


def _compare_feed(a: FeedMetric, b: FeedMetric) -> float:
    if abs(a.aproveitamento - b.aproveitamento) < PCT_EPSILON:
        return b.vitorias - a.vitorias
    return b.aproveitamento - a.aproveitamento


def sort_feed_standings(metrics: Iterable[FeedMetric]) -> List[FeedMetric]:
    """Default order of the raw feed table: win percentage, then wins."""
    return sorted(metrics, key=cmp_to_key(_compare_feed))
