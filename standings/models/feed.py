from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict

# Field names on the external standings feed vary between snapshots.
# Aliases are tried in order; the first one present on a row wins.
FEED_NAME_FIELDS: Tuple[str, ...] = ("time", "nome", "equipe")

FEED_NUMERIC_ALIASES: Dict[str, Tuple[str, ...]] = {
    "vitorias": ("v", "vitorias", "V", "wins"),
    "derrotas": ("d", "derrotas", "D", "losses"),
    "media_pontos_ataque": ("pts", "media_pontos_ataque", "pts_ataque", "PTS_ATAQUE"),
    "media_pontos_defesa": ("pts_contra", "media_pontos_defesa", "pts_defesa", "PTS_DEFESA"),
    "aproveitamento": ("pct_vit", "aproveitamento", "pct", "PCT"),
}

# Streak text: empty strings are treated as absent
FEED_STREAK_ALIASES: Tuple[str, ...] = ("ultimos_5", "last_5", "strk", "streak")


class FeedMetric(BaseModel):
    """Canonical per-team metrics produced from the external feed."""

    model_config = ConfigDict(frozen=True)

    time: str = ""
    vitorias: float = 0.0
    derrotas: float = 0.0
    media_pontos_ataque: float = 0.0  # points scored per game
    media_pontos_defesa: float = 0.0  # points allowed per game
    aproveitamento: float = 0.0  # win percentage
    ultimos_5: str = ""  # streak text, e.g. "W4" or "V-V-D-V-D"
