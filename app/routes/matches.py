import logging
from datetime import datetime
import re

from fastapi import APIRouter, Depends, Query

from app.deps import get_cache
from app.errors import error_response
from config.settings import settings
from data.cache import MemoryCache
from data.providers.errors import ProviderError
from services.prediction import FixtureNotFoundError, get_match_details, list_fixtures

logger = logging.getLogger(__name__)

router = APIRouter()

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_valid_date(value: str) -> bool:
    """YYYY-MM-DD y además fecha real (2026-02-30 no pasa)."""
    if not value or not _DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


@router.get("/fixtures")
def get_fixtures(
    date: str | None = Query(None),
    league_id: str | None = Query(None, alias="leagueId"),
    league: str | None = Query(None),
    cache: MemoryCache = Depends(get_cache),
):
    """Liga por `leagueId` (código de competición, ej. PL) o `league`; sin liga => todas las gratuitas."""
    league = league_id or league or None
    if not date:
        return error_response(400, "MISSING_PARAMETERS", "Required parameter: date (YYYY-MM-DD)", "VALIDATION_ERROR")
    if not _is_valid_date(date):
        return error_response(400, "INVALID_DATE", "Date must be in YYYY-MM-DD format", "VALIDATION_ERROR")
    if not settings.has_football_data_key():
        return error_response(500, "MISSING_API_KEY", "Football-Data API key is not configured", "CONFIGURATION_ERROR")

    try:
        fixtures, cached = list_fixtures(date, league, cache=cache)
    except ProviderError as e:
        logger.warning("Football-Data falló (%s, %s): %s", date, league, e)
        return error_response(500, "INTERNAL_ERROR", str(e), "API_ERROR")

    return {"ok": True, "data": fixtures, "cached": cached}


def _parse_fixture_id(value: str) -> int | None:
    """Entero positivo o None."""
    try:
        n = int(value.strip())
    except ValueError:
        return None
    return n if n > 0 else None


@router.get("/match")
def get_match(
    fixture_id_param: str | None = Query(None, alias="fixtureId"),
    fixture_id_snake: str | None = Query(None, alias="fixture_id"),
    cache: MemoryCache = Depends(get_cache),
):
    """Acepta `fixtureId` o `fixture_id`."""
    raw_id = fixture_id_param if fixture_id_param is not None else fixture_id_snake
    if raw_id is None or not raw_id.strip():
        return error_response(400, "MISSING_PARAMETER", "Required parameter: fixtureId", "VALIDATION_ERROR")
    fixture_id = _parse_fixture_id(raw_id)
    if fixture_id is None:
        return error_response(
            400, "INVALID_FIXTURE_ID", "Fixture ID must be a valid positive number", "VALIDATION_ERROR"
        )
    if not settings.has_apisports_key():
        return error_response(500, "MISSING_API_KEY", "API-Sports API key is not configured", "CONFIGURATION_ERROR")

    try:
        details, cached = get_match_details(fixture_id, cache=cache)
    except FixtureNotFoundError as e:
        return error_response(404, "FIXTURE_NOT_FOUND", str(e), "NOT_FOUND")
    except ProviderError as e:
        logger.warning("API-Sports falló para match %s: %s", fixture_id, e)
        return error_response(500, "INTERNAL_ERROR", str(e), "API_ERROR")

    return {"ok": True, "data": details, "cached": cached}
