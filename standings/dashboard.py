import asyncio
from typing import Any, Dict, List, Optional, Sequence, Set

from loguru import logger
from pydantic import ValidationError

from standings.calculation.ranking import momentum_score, rank_teams, sort_feed_standings
from standings.calculation.record import toggle_result
from standings.config.settings import settings
from standings.data.seed_teams import SEED_TEAMS
from standings.models.feed import FeedMetric
from standings.models.player import PlayerStat, UnavailablePlayer
from standings.models.team import MergedTeam, SeedTeam
from standings.normalization.merger import merge_teams
from standings.normalization.names import NameResolver
from standings.normalization.normalizer import FeedMetrics, NormalizationError, Normalizer
from standings.storage.supabase_client import (
    StoreError,
    fetch_feed,
    fetch_player_stats,
    fetch_teams,
    fetch_unavailable_players,
    persist_record,
    subscribe_changes,
)


class StandingsDashboard:
    """Owns the raw rows from the backend and the merged view derived from them.

    The merged teams are never edited in place: every change to the raw rows
    (refresh, change notification, toggle) recomputes them from scratch.
    """

    def __init__(
        self,
        client: Any,
        seed_teams: Sequence[SeedTeam] = SEED_TEAMS,
        resolver: Optional[NameResolver] = None,
    ):
        self.client = client
        self.seed_teams = list(seed_teams)
        self.resolver = resolver
        self.normalizer = Normalizer(self.seed_teams, resolver)

        self._db_rows: List[Dict[str, Any]] = []
        self._feed_rows: List[Dict[str, Any]] = []
        self._player_rows: List[Dict[str, Any]] = []
        self._injury_rows: List[Dict[str, Any]] = []

        self.feed_metrics: FeedMetrics = {}
        self.teams: List[MergedTeam] = []
        self._pending_writes: Set[asyncio.Task] = set()
        self._change_tasks: Set[asyncio.Task] = set()

    # --- Derived views ---

    def recompute(
        self,
        db_rows: Optional[List[Dict[str, Any]]] = None,
        feed_rows: Optional[List[Dict[str, Any]]] = None,
    ) -> List[MergedTeam]:
        """Re-runs normalize -> merge, defaulting to the current raw rows.

        New rows are only stored once the merge succeeds, so a failure leaves
        the raw rows and the merged view exactly as they were.
        """
        db_rows = self._db_rows if db_rows is None else db_rows
        feed_rows = self._feed_rows if feed_rows is None else feed_rows
        feed_metrics = self.normalizer.normalize_feed(feed_rows)
        teams = merge_teams(db_rows, self.seed_teams, feed_metrics, self.resolver)
        self._db_rows, self._feed_rows = db_rows, feed_rows
        self.feed_metrics, self.teams = feed_metrics, teams
        return teams

    @property
    def standings(self) -> List[MergedTeam]:
        return rank_teams(self.teams)

    @property
    def feed_standings(self) -> List[FeedMetric]:
        return sort_feed_standings(self.feed_metrics.values())

    @property
    def player_stats(self) -> List[PlayerStat]:
        players = []
        for row in self._player_rows:
            try:
                players.append(PlayerStat.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid player row {row.get('id')}: {e.error_count()} errors")
        return players

    @property
    def unavailable_players(self) -> List[UnavailablePlayer]:
        return self.normalizer.normalize_unavailable_players(self._injury_rows)

    def momentum(self, team: MergedTeam) -> int:
        return momentum_score(team.record)

    # --- Fetching ---

    async def _load(self, fetch, current: List[Dict[str, Any]], label: str) -> List[Dict[str, Any]]:
        try:
            return await fetch(self.client)
        except StoreError as e:
            logger.warning(f"Keeping {len(current)} stale {label} rows: {e}")
            return current

    async def refresh(self) -> List[MergedTeam]:
        """Fetches every source concurrently, then recomputes the merged teams."""
        logger.info("Refreshing dashboard data...")
        db_rows, feed_rows, player_rows, injury_rows = await asyncio.gather(
            self._load(fetch_teams, self._db_rows, "team"),
            self._load(fetch_feed, self._feed_rows, "feed"),
            self._load(fetch_player_stats, self._player_rows, "player"),
            self._load(fetch_unavailable_players, self._injury_rows, "injury"),
        )
        teams = self.recompute(db_rows, feed_rows)
        self._player_rows, self._injury_rows = player_rows, injury_rows
        logger.info(
            f"Refresh complete: {len(teams)} teams, {len(self.feed_metrics)} feed entries, "
            f"{len(player_rows)} players, {len(injury_rows)} injury rows."
        )
        return teams

    async def handle_change(self, table: str) -> None:
        """Re-fetches the table named in a change notification and recomputes.

        A refetch that cannot be merged is logged and dropped; the previous
        rows and merged view stay in place.
        """
        try:
            if table == settings.teams_table:
                self.recompute(db_rows=await self._load(fetch_teams, self._db_rows, "team"))
            elif table == settings.feed_table:
                self.recompute(feed_rows=await self._load(fetch_feed, self._feed_rows, "feed"))
            elif table == settings.players_table:
                self._player_rows = await self._load(
                    fetch_player_stats, self._player_rows, "player"
                )
                self.recompute()
            elif table == settings.injuries_table:
                self._injury_rows = await self._load(
                    fetch_unavailable_players, self._injury_rows, "injury"
                )
                self.recompute()
            else:
                logger.debug(f"Ignoring change notification for unknown table {table}")
        except NormalizationError as e:
            logger.error(f"Discarding {table} change, rows could not be merged: {e}")

    async def watch(self):
        """Subscribes to change notifications for every source table."""
        tables = [
            settings.teams_table,
            settings.feed_table,
            settings.players_table,
            settings.injuries_table,
        ]

        def _on_change(table: str) -> None:
            task = asyncio.get_running_loop().create_task(self.handle_change(table))
            self._change_tasks.add(task)
            task.add_done_callback(self._change_done)

        return await subscribe_changes(self.client, tables, _on_change)

    def _change_done(self, task: asyncio.Task) -> None:
        self._change_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error(f"Change handler failed: {error}")

    # --- Mutations ---

    async def toggle_record(self, team_id: int, index: int) -> Optional[MergedTeam]:
        """Flips one result of a team's record.

        The in-memory rows are updated before anything is written, and the
        write runs in the background. A failed write is logged and the local
        change is kept until the next refresh replaces it.
        """
        team = next((t for t in self.teams if t.id == team_id), None)
        if team is None:
            logger.warning(f"Toggle requested for unknown team id {team_id}")
            return None

        updated = toggle_result(team, index)
        new_record = [result.value for result in updated.record]
        self.recompute(
            db_rows=[
                {**row, "record": new_record} if row.get("id") == team_id else row
                for row in self._db_rows
            ]
        )

        task = asyncio.get_running_loop().create_task(
            self._persist_record(team_id, updated.record)
        )
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

        return next((t for t in self.teams if t.id == team_id), updated)

    async def _persist_record(self, team_id: int, record) -> None:
        try:
            saved = await persist_record(self.client, team_id, record)
        except Exception as e:
            logger.error(f"Failed to save record for team {team_id}: {e}")
            return
        if not saved:
            logger.error(f"Failed to save record for team {team_id}; keeping local state.")

    async def flush_pending_writes(self) -> None:
        """Waits for background record writes that are still running."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))
