from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from standings.models.feed import (
    FEED_NAME_FIELDS,
    FEED_NUMERIC_ALIASES,
    FEED_STREAK_ALIASES,
    FeedMetric,
)
from standings.models.player import UnavailablePlayer
from standings.models.team import SeedTeam
from standings.normalization.names import DEFAULT_RESOLVER, NameResolver
from standings.utils.misc_utils import coerce_number, first_present, first_truthy

# Type alias for the output of feed normalization, keyed by lower-cased name
FeedMetrics = Dict[str, FeedMetric]

PLAYER_NAME_FIELDS = ("player_name", "nome")
PLAYER_TEAM_FIELDS = ("team_name", "time")
PLAYER_REASON_FIELDS = ("injury_description", "motivo")
PLAYER_SEVERITY_FIELDS = ("injury_status", "gravidade")


class NormalizationError(Exception):
    """Raised when a collaborator hands over structurally invalid input."""

    pass


def ensure_rows(rows: Any, source: str) -> Iterable:
    """Rejects anything that is not a collection of rows."""
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        raise NormalizationError(
            f"Expected a collection of {source} rows, got {type(rows).__name__}"
        )
    return rows


class Normalizer:
    """Turns raw feed and injury rows into canonical records."""

    def __init__(
        self,
        seed_teams: Sequence[SeedTeam],
        resolver: Optional[NameResolver] = None,
    ):
        self.seed_teams = list(seed_teams)
        self.resolver = resolver or DEFAULT_RESOLVER
        logger.debug(f"Normalizer initialized with {len(self.seed_teams)} seed teams.")

    def normalize_feed(self, raw_rows: Iterable[Mapping[str, Any]]) -> FeedMetrics:
        """Merges feed rows on top of the seed names.

        Every seed team gets an entry; feed rows that match no existing entry
        add their own. A row only overrides the fields it actually carries.
        """
        ensure_rows(raw_rows, "feed")

        entries: Dict[str, Dict[str, Any]] = {}
        for seed in self.seed_teams:
            entries[seed.name.lower()] = {**seed.feed, "time": seed.name}

        skipped = 0
        for row in raw_rows:
            if not isinstance(row, Mapping):
                logger.warning(f"Skipping non-dictionary feed row: {type(row)}")
                skipped += 1
                continue

            raw_name = first_truthy(row, FEED_NAME_FIELDS)
            if not raw_name:
                logger.debug(f"Skipping feed row without a team name: {row}")
                skipped += 1
                continue

            row_key = str(raw_name).lower()
            target_key = self.resolver.resolve(row_key, list(entries)) or row_key
            existing = entries.get(target_key, {})
            if target_key != row_key:
                logger.debug(f"Feed row '{raw_name}' merged into '{target_key}'")

            merged = dict(existing)
            merged.setdefault("time", str(raw_name))
            for field, aliases in FEED_NUMERIC_ALIASES.items():
                value = first_present(row, aliases)
                if value is not None:
                    merged[field] = value
            streak = first_truthy(row, FEED_STREAK_ALIASES)
            if streak:
                merged["ultimos_5"] = streak

            entries[target_key] = merged

        metrics: FeedMetrics = {
            key: FeedMetric(
                time=str(entry.get("time") or ""),
                ultimos_5=str(entry.get("ultimos_5") or ""),
                **{field: coerce_number(entry.get(field)) for field in FEED_NUMERIC_ALIASES},
            )
            for key, entry in entries.items()
        }
        logger.info(
            f"Normalized feed into {len(metrics)} team entries ({skipped} rows skipped)."
        )
        return metrics

    def normalize_unavailable_players(
        self, raw_rows: Iterable[Mapping[str, Any]]
    ) -> List[UnavailablePlayer]:
        """Maps injury rows to UnavailablePlayer, dropping nameless rows and duplicates."""
        ensure_rows(raw_rows, "injury")

        players: List[UnavailablePlayer] = []
        seen = set()
        for row in raw_rows:
            if not isinstance(row, Mapping):
                logger.warning(f"Skipping non-dictionary injury row: {type(row)}")
                continue
            name = first_truthy(row, PLAYER_NAME_FIELDS)
            if not name:
                continue
            dedupe_key = str(name).strip().lower()
            if dedupe_key in seen:
                logger.debug(f"Dropping duplicate injury entry for {name}")
                continue
            seen.add(dedupe_key)

            players.append(
                UnavailablePlayer(
                    name=str(name),
                    team=str(first_truthy(row, PLAYER_TEAM_FIELDS) or "N/A"),
                    reason=str(first_truthy(row, PLAYER_REASON_FIELDS) or "Injury"),
                    expected_return=str(row.get("retorno_previsto") or "TBD"),
                    severity=str(
                        first_truthy(row, PLAYER_SEVERITY_FIELDS) or "moderada"
                    ).lower(),
                )
            )
        return players


def normalize_feed(
    seed_teams: Sequence[SeedTeam],
    raw_rows: Iterable[Mapping[str, Any]],
    resolver: Optional[NameResolver] = None,
) -> FeedMetrics:
    """Functional shortcut for Normalizer(seed_teams, resolver).normalize_feed(raw_rows)."""
    return Normalizer(seed_teams, resolver).normalize_feed(raw_rows)
