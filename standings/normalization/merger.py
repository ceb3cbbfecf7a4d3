from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from standings.calculation.streaks import parse_streak, to_result
from standings.models.enums import Conference, GameResult
from standings.models.feed import FeedMetric
from standings.models.team import (
    GENERIC_LOGO,
    UNKNOWN_TEAM_NAME,
    MergedTeam,
    SeedTeam,
    TeamStats,
)
from standings.normalization.names import DEFAULT_RESOLVER, NameResolver
from standings.normalization.normalizer import NormalizationError, ensure_rows
from standings.utils.misc_utils import coerce_number, first_truthy

DB_NAME_FIELDS = ("name", "nome")


def _conference(value: Any) -> Conference:
    try:
        return Conference(value)
    except ValueError:
        if value:
            logger.debug(f"Unknown conference '{value}', defaulting to East")
        return Conference.EAST


def _synthetic_seed(db_row: Mapping[str, Any], db_name: Optional[str]) -> SeedTeam:
    """Stand-in for a database row that matches no known franchise."""
    return SeedTeam(
        name=str(db_name) if db_name else UNKNOWN_TEAM_NAME,
        logo=GENERIC_LOGO,
        record=[],
        wins=0,
        losses=0,
        conference=_conference(db_row.get("conference")),
    )


def _resolve_record(
    db_row: Mapping[str, Any], feed: Optional[FeedMetric], seed: SeedTeam
) -> List[GameResult]:
    db_record = db_row.get("record")
    if isinstance(db_record, (list, tuple)) and len(db_record) > 0:
        return [to_result(result) for result in db_record]
    if feed is not None:
        parsed = parse_streak(feed.ultimos_5)
        if parsed is not None:
            return parsed
    return list(seed.record)


def _db_count(db_row: Mapping[str, Any], field: str) -> Optional[int]:
    """Database win/loss count as int, or None when missing or unparseable."""
    value = db_row.get(field)
    number = coerce_number(value, default=None)
    if number is None:
        if value is not None:
            logger.debug(f"Ignoring unparseable {field} '{value}' on row {db_row.get('id')}")
        return None
    return int(number)


def _fallback_team(db_row: Mapping[str, Any], data: Mapping[str, Any]) -> MergedTeam:
    """MergedTeam from the computed fields only, dropping the raw database columns."""
    row_id = coerce_number(db_row.get("id"), default=None)
    return MergedTeam(
        id=int(row_id) if row_id is not None else None,
        name=data["name"],
        logo=data["logo"],
        conference=data["conference"],
        record=data["record"],
        wins=data["wins"],
        losses=data["losses"],
        stats=data.get("stats"),
    )


def merge_team(
    db_row: Mapping[str, Any],
    seed_teams: Sequence[SeedTeam],
    feed_metrics: Mapping[str, FeedMetric],
    resolver: Optional[NameResolver] = None,
) -> MergedTeam:
    """Builds one MergedTeam from a database row.

    Identity (name, logo, conference) comes from the matched seed team. For
    wins, losses and the last-five record the database wins over the feed,
    and the feed wins over the seed.
    """
    if not isinstance(db_row, Mapping):
        raise NormalizationError(f"Expected a team row mapping, got {type(db_row).__name__}")
    resolver = resolver or DEFAULT_RESOLVER

    db_name = first_truthy(db_row, DB_NAME_FIELDS)
    seeds_by_name = {seed.name.lower(): seed for seed in seed_teams}
    seed_key = resolver.resolve(str(db_name or ""), list(seeds_by_name))
    if seed_key is not None:
        seed = seeds_by_name[seed_key]
    else:
        seed = _synthetic_seed(db_row, db_name)
        logger.debug(f"No seed team for row {db_row.get('id')} ('{db_name}'), using fallback")

    feed_key = resolver.resolve(seed.name.lower(), list(feed_metrics))
    feed = feed_metrics[feed_key] if feed_key is not None else None

    db_wins = _db_count(db_row, "wins")
    db_losses = _db_count(db_row, "losses")
    wins = db_wins if db_wins is not None else (int(feed.vitorias) if feed else seed.wins)
    losses = (
        db_losses if db_losses is not None else (int(feed.derrotas) if feed else seed.losses)
    )

    data: Dict[str, Any] = dict(db_row)
    data.pop("stats", None)
    data.update(
        name=seed.name,
        logo=seed.logo,
        conference=seed.conference,
        record=_resolve_record(db_row, feed, seed),
        wins=wins,
        losses=losses,
    )
    if feed is not None:
        data["stats"] = TeamStats(
            media_pontos_ataque=feed.media_pontos_ataque,
            media_pontos_defesa=feed.media_pontos_defesa,
            aproveitamento=feed.aproveitamento,
            ultimos_5=feed.ultimos_5,
        )
    try:
        return MergedTeam.model_validate(data)
    except ValidationError as e:
        logger.warning(
            f"Invalid team row {db_row.get('id')} ('{db_name}'): {e.error_count()} errors, "
            "keeping only the merged fields"
        )
        return _fallback_team(db_row, data)


def merge_teams(
    db_rows: Iterable[Mapping[str, Any]],
    seed_teams: Sequence[SeedTeam],
    feed_metrics: Mapping[str, FeedMetric],
    resolver: Optional[NameResolver] = None,
) -> List[MergedTeam]:
    """One MergedTeam per database row, in input order. Rows are never dropped."""
    ensure_rows(db_rows, "team")
    merged = [merge_team(row, seed_teams, feed_metrics, resolver) for row in db_rows]
    logger.info(f"Merged {len(merged)} teams.")
    return merged


def resolve_team_logo(
    team_name: str,
    teams: Sequence[MergedTeam],
    resolver: Optional[NameResolver] = None,
) -> str:
    """Logo of the merged team whose name matches `team_name`, else the league logo."""
    resolver = resolver or DEFAULT_RESOLVER
    names = [team.name for team in teams]
    hit = resolver.resolve(team_name, names)
    if hit is None:
        return GENERIC_LOGO
    return teams[names.index(hit)].logo
