from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import Conference, GameResult

GENERIC_LOGO = "https://a.espncdn.com/i/teamlogos/nba/500/nba.png"
UNKNOWN_TEAM_NAME = "Unknown Team"


class SeedTeam(BaseModel):
    """Static franchise metadata, the identity anchor for name matching.

    Every seed gets a feed entry during normalization, seeded from `feed`,
    even when no feed row mentions the team. A merged seed team therefore
    always has `stats` (zeros when the feed is silent), and a null database
    win/loss count resolves to the feed value (0) rather than to the seed's
    `wins`/`losses`, which are only reached when the feed map handed to the
    merger has no entry for the team.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    logo: str = GENERIC_LOGO
    record: List[GameResult] = []  # oldest -> newest, last-resort fallback
    wins: int = 0
    losses: int = 0
    conference: Conference = Conference.EAST
    # Offline feed snapshot (feed-shaped fields) used before the feed arrives
    feed: Dict[str, Any] = Field(default_factory=dict)


class TeamStats(BaseModel):
    """Feed metrics attached to a merged team when the feed knows the team."""

    media_pontos_ataque: float = 0.0
    media_pontos_defesa: float = 0.0
    aproveitamento: float = 0.0
    ultimos_5: str = ""


class MergedTeam(BaseModel):
    """The single canonical per-franchise record shown in the standings.

    Extra columns from the database row are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    name: str
    logo: str = GENERIC_LOGO
    conference: Conference = Conference.EAST
    wins: int = 0
    losses: int = 0
    record: List[GameResult] = []
    stats: Optional[TeamStats] = None
