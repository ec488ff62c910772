"""
Modelo Poisson para probabilidades de partido (1X2, Over 1.5/2.5, marcador más probable).
Goles de cada equipo independientes; sin correlación ni ajuste Dixon-Coles.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from core.models import ScoreProbability

DEFAULT_MAX_GOALS = 6
# Cota del helper heredado (calculate_poisson_prediction); no usar en código nuevo
LEGACY_MAX_GOALS = 10


def poisson_pmf(lmbda: float, k: int) -> float:
    """
    PMF(k; λ) = e^-λ * λ^k / k!

    Se calcula de forma iterativa (e^-λ y luego * λ/i) para no armar λ^k ni k! por separado.
    k < 0 => 0. λ = 0 => distribución degenerada en 0 goles.
    """
    if k < 0:
        return 0.0
    if lmbda <= 0:
        return 1.0 if k == 0 else 0.0

    prob = math.exp(-lmbda)
    for i in range(1, k + 1):
        prob *= lmbda / i
    return prob


@dataclass(frozen=True)
class OutcomeDistribution:
    """Resultado de compute_outcome_distribution. Las sumas NO se normalizan."""
    p_home_win: float
    p_draw: float
    p_away_win: float
    p_over15: float
    p_over25: float
    most_likely_score: ScoreProbability
    matrix: list[list[float]] | None = None

    @property
    def total_mass(self) -> float:
        """Masa total de la matriz truncada (≈ 1, nunca exactamente)."""
        return self.p_home_win + self.p_draw + self.p_away_win

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "p_home_win": self.p_home_win,
            "p_draw": self.p_draw,
            "p_away_win": self.p_away_win,
            "p_over15": self.p_over15,
            "p_over25": self.p_over25,
            "most_likely_score": self.most_likely_score.to_dict(),
        }
        if self.matrix is not None:
            out["matrix"] = self.matrix
        return out


def score_matrix(
    lambda_home: float,
    lambda_away: float,
    max_goals: int = DEFAULT_MAX_GOALS,
) -> list[list[float]]:
    """matrix[h][a] = P(local marca h) * P(visitante marca a), con 0 <= h, a <= max_goals."""
    ph = [poisson_pmf(lambda_home, h) for h in range(max_goals + 1)]
    pa = [poisson_pmf(lambda_away, a) for a in range(max_goals + 1)]
    return [[p_h * p_a for p_a in pa] for p_h in ph]


def most_likely_score(matrix: list[list[float]]) -> ScoreProbability:
    """
    Celda de mayor probabilidad. Empates: gana la primera en orden (h, a).
    Matriz vacía => 0-0 con probabilidad 0.
    """
    best = ScoreProbability(0, 0, 0.0)
    for h, row in enumerate(matrix):
        for a, p in enumerate(row):
            if p > best.probability:
                best = ScoreProbability(h, a, p)
    return best


def compute_outcome_distribution(
    lambda_home: float,
    lambda_away: float,
    max_goals: int = DEFAULT_MAX_GOALS,
    include_matrix: bool = False,
) -> OutcomeDistribution:
    """
    Recorre la matriz de marcadores una sola vez y acumula:
    - 1X2 (h > a, h == a, h < a)
    - Over 1.5 / Over 2.5 por goles totales
    - marcador más probable (misma regla de desempate que most_likely_score)
    """
    matrix = score_matrix(lambda_home, lambda_away, max_goals)

    p_home_win = p_draw = p_away_win = 0.0
    p_over15 = p_over25 = 0.0

    for h, row in enumerate(matrix):
        for a, p in enumerate(row):
            if h > a:
                p_home_win += p
            elif h == a:
                p_draw += p
            else:
                p_away_win += p

            total = h + a
            if total > 1.5:
                p_over15 += p
            if total > 2.5:
                p_over25 += p

    return OutcomeDistribution(
        p_home_win=p_home_win,
        p_draw=p_draw,
        p_away_win=p_away_win,
        p_over15=p_over15,
        p_over25=p_over25,
        most_likely_score=most_likely_score(matrix),
        matrix=matrix if include_matrix else None,
    )


def compute_outcome_probs(
    lambda_home: float,
    lambda_away: float,
    max_goals: int = DEFAULT_MAX_GOALS,
) -> dict[str, float]:
    """Vista reducida: solo 1X2 y Over/Under."""
    dist = compute_outcome_distribution(lambda_home, lambda_away, max_goals)
    return {
        "p_home_win": dist.p_home_win,
        "p_draw": dist.p_draw,
        "p_away_win": dist.p_away_win,
        "p_over15": dist.p_over15,
        "p_over25": dist.p_over25,
    }


def calculate_poisson_prediction(
    xg_home: float,
    xg_away: float,
    max_goals: int = LEGACY_MAX_GOALS,
) -> dict[str, Any]:
    """
    Formato heredado: 1X2 + xG + matriz completa, con cota 10 por compatibilidad.
    """
    dist = compute_outcome_distribution(xg_home, xg_away, max_goals, include_matrix=True)
    return {
        "home_win": dist.p_home_win,
        "draw": dist.p_draw,
        "away_win": dist.p_away_win,
        "expected_goals": {"home": xg_home, "away": xg_away},
        "score_matrix": dist.matrix,
    }


def calculate_expected_goals(
    attack_strength: float,
    opponent_defense_strength: float,
    league_average_goals: float = 2.5,
) -> float:
    """xG simple: ataque propio * defensa rival * promedio de la liga."""
    return attack_strength * opponent_defense_strength * league_average_goals
