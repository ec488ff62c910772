"""
Tipos inmutables del motor: partido histórico y marcador con probabilidad.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# Código corto de estado que marca un partido terminado (tiempo reglamentario)
FINISHED_STATUS = "FT"


@dataclass(frozen=True)
class MatchRecord:
    """
    Un partido (jugado o programado) usado como evidencia.
    home_goals / away_goals quedan en None hasta que el partido termina.
    """
    home_id: int
    away_id: int
    status: str | None = None
    home_goals: int | None = None
    away_goals: int | None = None
    id: int | None = None
    date: str = ""
    home_name: str = ""
    away_name: str = ""
    league_id: int | None = None
    season: int | None = None

    @property
    def is_finished(self) -> bool:
        return self.status == FINISHED_STATUS

    @property
    def has_score(self) -> bool:
        return self.home_goals is not None and self.away_goals is not None

    def involves(self, team_id: int) -> bool:
        return self.home_id == team_id or self.away_id == team_id

    def goals_for(self, team_id: int) -> int | None:
        """Goles marcados por team_id (local si jugó de local, visitante si no)."""
        if self.home_id == team_id:
            return self.home_goals
        return self.away_goals

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreProbability:
    home: int
    away: int
    probability: float

    def to_dict(self) -> dict[str, Any]:
        return {"home": self.home, "away": self.away, "probability": self.probability}
