"""
Estimación de λ (goles esperados por partido) a partir del historial de un equipo.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable

from core.models import MatchRecord

# Mínimo de partidos para estimar; fijo (si se necesita otra ventana, filtrar antes)
MIN_MATCHES = 3


class VenueMode(str, Enum):
    HOME_ONLY = "HOME_ONLY"
    AWAY_ONLY = "AWAY_ONLY"
    ALL = "ALL"


class InsufficientDataError(ValueError):
    """
    Menos de MIN_MATCHES partidos utilizables.
    stage: "venue" (tras filtrar por localía) | "finished" (terminados con marcador).
    """

    def __init__(self, got: int, stage: str = "venue", required: int = MIN_MATCHES) -> None:
        self.required = required
        self.got = got
        self.stage = stage
        what = "finished matches" if stage == "finished" else "matches"
        super().__init__(f"INSUFFICIENT_DATA: Need at least {required} {what}, got {got}")


def filter_by_venue(
    matches: Iterable[MatchRecord],
    team_id: int,
    mode: VenueMode,
) -> list[MatchRecord]:
    """
    mode: HOME_ONLY -> partidos donde team_id fue local
          AWAY_ONLY -> partidos donde team_id fue visitante
          ALL       -> cualquiera de los dos
    """
    mode = VenueMode(mode)
    if mode is VenueMode.HOME_ONLY:
        return [m for m in matches if m.home_id == team_id]
    if mode is VenueMode.AWAY_ONLY:
        return [m for m in matches if m.away_id == team_id]
    return [m for m in matches if m.involves(team_id)]


def compute_lambda_for_team(
    matches: Iterable[MatchRecord],
    team_id: int,
    mode: VenueMode,
) -> float:
    """
    Promedio de goles marcados por team_id en sus partidos terminados (FT) con marcador.
    Raises InsufficientDataError si tras el filtro de localía, o tras quedarse solo con
    los terminados, quedan menos de MIN_MATCHES.
    """
    filtered = filter_by_venue(matches, team_id, mode)
    if len(filtered) < MIN_MATCHES:
        raise InsufficientDataError(len(filtered), stage="venue")

    total_goals = 0
    n = 0
    for m in filtered:
        # sin estado o sin goles => se saltea (no cuenta como 0)
        if not (m.is_finished and m.has_score):
            continue
        total_goals += m.goals_for(team_id)
        n += 1

    if n < MIN_MATCHES:
        raise InsufficientDataError(n, stage="finished")

    return total_goals / n


def lambdas_for_fixture(
    home_history: Iterable[MatchRecord],
    away_history: Iterable[MatchRecord],
    home_id: int,
    away_id: int,
    use_home_away_split: bool,
) -> tuple[float, float]:
    """
    Con split: local solo de local y visitante solo de visitante.
    Sin split: todos los partidos para ambos.
    """
    if use_home_away_split:
        home_mode, away_mode = VenueMode.HOME_ONLY, VenueMode.AWAY_ONLY
    else:
        home_mode = away_mode = VenueMode.ALL
    return (
        compute_lambda_for_team(home_history, home_id, home_mode),
        compute_lambda_for_team(away_history, away_id, away_mode),
    )
