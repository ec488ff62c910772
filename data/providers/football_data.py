"""
Cliente de la API Football-Data.org v4 (listado de partidos por día).
Usa config.settings para API key y URL base.
"""
from __future__ import annotations

import logging
import os
import time

import requests

from config.settings import settings
from data.providers.errors import MissingApiKeyError, ProviderError

logger = logging.getLogger(__name__)


class FootballDataError(ProviderError):
    pass


# status de Football-Data -> código corto (mismo vocabulario que API-Sports)
STATUS_SHORT: dict[str, str] = {
    "FINISHED": "FT",
    "IN_PLAY": "LIVE",
}


def _headers() -> dict[str, str]:
    if not settings.football_data_api_key:
        raise MissingApiKeyError("FOOTBALL_DATA_API_KEY no está configurada (config o .env)")
    return {"X-Auth-Token": settings.football_data_api_key}


def _reset_seconds(reset: str | None, default: int = 60) -> int:
    """Segundos hasta el reset del contador; header ausente o no numérico => default."""
    try:
        return int(reset) if reset else default
    except ValueError:
        return default


def _get(path: str, params: dict | None = None) -> dict:
    url = f"{settings.football_data_base_url}{path}"
    while True:
        r = requests.get(url, headers=_headers(), params=params, timeout=20)

        reset = r.headers.get("X-RequestCounter-Reset")

        # 429 -> dormir según reset y reintentar, o fallar rápido si POISSON_SLEEP_ON_429=0
        if r.status_code == 429:
            sleep_on_429 = os.getenv("POISSON_SLEEP_ON_429", "1").strip().lower() in ("1", "true", "yes")
            if sleep_on_429:
                wait = _reset_seconds(reset)
                logger.warning("Football-Data 429. Sleeping %ss... (%s)", wait, url)
                time.sleep(wait)
                continue
            raise FootballDataError(f"Football-Data 429: {r.text}")

        if r.status_code != 200:
            raise FootballDataError(f"Football-Data Error {r.status_code}: {r.text}")

        return r.json()


def _map_match(m: dict) -> dict:
    full_time = (m.get("score") or {}).get("fullTime")
    status = m.get("status") or ""
    return {
        "id": m.get("id"),
        "date": m.get("utcDate", ""),
        "teams": {
            "home": {"name": (m.get("homeTeam") or {}).get("name", "")},
            "away": {"name": (m.get("awayTeam") or {}).get("name", "")},
        },
        "status": {"short": STATUS_SHORT.get(status, "NS"), "long": status},
        "score": {"home": full_time.get("home"), "away": full_time.get("away")} if full_time else None,
    }


def get_fixtures_for_date(date: str, league_code: str | None = None) -> list[dict]:
    """
    Partidos de un día (YYYY-MM-DD).
    Con league_code usa /competitions/{code}/matches; sin liga recorre las ligas del plan
    gratuito y saltea las que fallen.
    """
    params = {"dateFrom": date, "dateTo": date}

    if league_code:
        data = _get(f"/competitions/{league_code}/matches", params=params)
        matches = data.get("matches", []) or []
    else:
        matches = []
        for code in settings.free_leagues:
            try:
                data = _get(f"/competitions/{code}/matches", params=params)
            except MissingApiKeyError:
                raise
            except ProviderError as e:
                logger.info("Sin partidos para %s (%s): %s", code, date, e)
                continue
            matches.extend(data.get("matches", []) or [])

    logger.info("Football-Data %s liga=%s: %d partidos", date, league_code or "all", len(matches))
    return [_map_match(m) for m in matches]
