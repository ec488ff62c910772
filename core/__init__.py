"""
Lógica de negocio: Poisson, estimación de λ, distribución de resultados.
Sin dependencias de I/O (DB, HTTP, disco); solo datos en memoria.
"""
from core.lambdas import (
    InsufficientDataError,
    VenueMode,
    compute_lambda_for_team,
    filter_by_venue,
    lambdas_for_fixture,
)
from core.models import MatchRecord, ScoreProbability
from core.poisson import (
    DEFAULT_MAX_GOALS,
    OutcomeDistribution,
    compute_outcome_distribution,
    compute_outcome_probs,
    most_likely_score,
    poisson_pmf,
    score_matrix,
)

__all__ = [
    "DEFAULT_MAX_GOALS",
    "InsufficientDataError",
    "MatchRecord",
    "OutcomeDistribution",
    "ScoreProbability",
    "VenueMode",
    "compute_lambda_for_team",
    "compute_outcome_distribution",
    "compute_outcome_probs",
    "filter_by_venue",
    "lambdas_for_fixture",
    "most_likely_score",
    "poisson_pmf",
    "score_matrix",
]
