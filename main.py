import sys
import asyncio
import argparse
from typing import List

# --- Settings/Logging ---
from standings.logging.setup import setup_logging

setup_logging()

from loguru import logger

from standings.dashboard import StandingsDashboard
from standings.models.enums import GameResult
from standings.models.player import UnavailablePlayer
from standings.models.team import MergedTeam
from standings.storage.supabase_client import initialize_supabase

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

_RESULT_MARKUP = {GameResult.WIN: "[green]V[/green]", GameResult.LOSS: "[red]D[/red]"}


def build_standings_table(dashboard: StandingsDashboard) -> Table:
    table = Table(title="NBA Standings by Momentum")
    table.add_column("#", justify="right")
    table.add_column("Team")
    table.add_column("Conf")
    table.add_column("W-L", justify="center")
    table.add_column("Last 5", justify="center")
    table.add_column("Momentum", justify="right")
    table.add_column("PCT", justify="right")

    teams: List[MergedTeam] = dashboard.standings
    for rank, team in enumerate(teams, start=1):
        last_five = " ".join(_RESULT_MARKUP[r] for r in team.record) or "-"
        pct = f"{team.stats.aproveitamento:.3f}" if team.stats else "-"
        table.add_row(
            str(rank),
            team.name,
            team.conference.value,
            f"{team.wins}-{team.losses}",
            last_five,
            str(dashboard.momentum(team)),
            pct,
        )
    return table


def build_injury_panel(players: List[UnavailablePlayer]) -> Panel:
    if not players:
        return Panel("No unavailable players reported.", title="Injury Report")
    lines = [
        f"[bold]{p.name}[/bold] ({p.team}) - {p.reason}, back: {p.expected_return} [{p.severity}]"
        for p in players
    ]
    return Panel("\n".join(lines), title="Injury Report")


def render(dashboard: StandingsDashboard) -> None:
    console.print(build_standings_table(dashboard))
    console.print(build_injury_panel(dashboard.unavailable_players))


async def main(watch: bool = False) -> None:
    """Main entry point for the dashboard."""
    logger.info("Starting NBA standings dashboard")

    supabase_client = await initialize_supabase()
    if not supabase_client:
        logger.critical("Failed to initialize Supabase client. Exiting.")
        return

    dashboard = StandingsDashboard(supabase_client)
    await dashboard.refresh()
    render(dashboard)

    if not watch:
        return

    await dashboard.watch()
    logger.info("Watching for changes (Ctrl+C to stop)...")
    last_seen = None
    while True:
        await asyncio.sleep(2)
        if dashboard.teams is not last_seen:
            if last_seen is not None:
                render(dashboard)
            last_seen = dashboard.teams


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Live NBA standings dashboard.")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and re-render whenever the backend reports a change.",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    try:
        asyncio.run(main(watch=args.watch))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
