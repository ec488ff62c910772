"""
Orquestación de una predicción: fixture → historial de ambos equipos → λ → distribución Poisson.
También expone detalle de partido y listado por día, con cache opcional.
El resultado es el mismo con o sin cache.
"""
from __future__ import annotations

import logging
from typing import Any

from config.settings import settings
from core.lambdas import lambdas_for_fixture
from core.models import MatchRecord
from core.poisson import DEFAULT_MAX_GOALS, compute_outcome_distribution
from data.cache import MemoryCache, fixtures_key, history_key, match_key
from data.providers import api_sports, football_data

logger = logging.getLogger(__name__)


class FixtureNotFoundError(LookupError):
    def __init__(self, fixture_id: int) -> None:
        self.fixture_id = fixture_id
        super().__init__(f"No fixture found with ID {fixture_id}")


def _team_history(
    team_id: int,
    league_id: int | None,
    season: int | None,
    window: int,
    cache: MemoryCache | None,
) -> list[MatchRecord]:
    key = history_key(team_id, league_id, season, window)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    history = api_sports.get_team_history(team_id, league_id, season, last=window)

    if cache is not None:
        cache.set(key, history, settings.history_cache_ttl)
    return history


def predict_fixture(
    fixture_id: int,
    window: int,
    use_home_away_split: bool,
    cache: MemoryCache | None = None,
    max_goals: int = DEFAULT_MAX_GOALS,
) -> dict[str, Any]:
    """
    Raises:
        FixtureNotFoundError: la API no conoce el fixture.
        InsufficientDataError: alguno de los equipos no tiene historial suficiente.
        ProviderError: fallas del proveedor, tal cual.
    """
    raw = api_sports.get_fixture(fixture_id)
    if raw is None:
        raise FixtureNotFoundError(fixture_id)

    fixture = api_sports.map_fixture(raw)
    home_history = _team_history(fixture.home_id, fixture.league_id, fixture.season, window, cache)
    away_history = _team_history(fixture.away_id, fixture.league_id, fixture.season, window, cache)

    lambda_home, lambda_away = lambdas_for_fixture(
        home_history,
        away_history,
        fixture.home_id,
        fixture.away_id,
        use_home_away_split,
    )
    dist = compute_outcome_distribution(lambda_home, lambda_away, max_goals, include_matrix=True)

    logger.info(
        "Predicción fixture %s (%s vs %s): λ=%.2f/%.2f 1X2=%.3f/%.3f/%.3f",
        fixture_id,
        fixture.home_name,
        fixture.away_name,
        lambda_home,
        lambda_away,
        dist.p_home_win,
        dist.p_draw,
        dist.p_away_win,
    )

    return {
        "fixture": {
            "id": fixture.id,
            "date": fixture.date,
            "home": {"id": fixture.home_id, "name": fixture.home_name},
            "away": {"id": fixture.away_id, "name": fixture.away_name},
            "league_id": fixture.league_id,
            "season": fixture.season,
        },
        "prediction": {
            "home_win": dist.p_home_win,
            "draw": dist.p_draw,
            "away_win": dist.p_away_win,
        },
        "expected_goals": {"home": lambda_home, "away": lambda_away},
        "over_under": {"over15": dist.p_over15, "over25": dist.p_over25},
        "score_matrix": dist.matrix,
        "most_likely_score": dist.most_likely_score.to_dict(),
    }


def get_match_details(fixture_id: int, cache: MemoryCache | None = None) -> tuple[dict[str, Any], bool]:
    """Devuelve (detalle, cached). Raises FixtureNotFoundError si no existe."""
    key = match_key(fixture_id)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached, True

    raw = api_sports.get_fixture(fixture_id)
    if raw is None:
        raise FixtureNotFoundError(fixture_id)
    details = api_sports.map_match_details(raw)

    if cache is not None:
        cache.set(key, details, settings.match_cache_ttl)
    return details, False


def list_fixtures(
    date: str,
    league: str | None = None,
    cache: MemoryCache | None = None,
) -> tuple[list[dict], bool]:
    """Devuelve (partidos del día, cached)."""
    key = fixtures_key(date, league)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached, True

    fixtures = football_data.get_fixtures_for_date(date, league)

    if cache is not None:
        cache.set(key, fixtures, settings.fixtures_cache_ttl)
    return fixtures, False
