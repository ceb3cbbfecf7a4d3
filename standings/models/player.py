from typing import Optional, Union

from pydantic import BaseModel


class PlayerStat(BaseModel):
    """Season averages for a single player."""

    id: Optional[int] = None
    nome: str
    time: str
    posicao: Optional[str] = None
    pontos: float = 0.0
    rebotes: float = 0.0
    assistencias: float = 0.0
    min: Optional[Union[str, float]] = None  # "34:12" or 34.2


class UnavailablePlayer(BaseModel):
    """A player listed on the injury report."""

    name: str
    team: str = "N/A"
    reason: str = "Injury"
    expected_return: str = "TBD"
    severity: str = "moderada"  # leve | moderada | grave
