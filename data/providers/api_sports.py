"""
Cliente de la API-Sports (API-Football v3).
Usa config.settings para API key, URL base y timeout.
"""
from __future__ import annotations

import logging
from typing import Any

import requests

from config.settings import settings
from core.models import MatchRecord
from data.providers.errors import MissingApiKeyError, ProviderError

logger = logging.getLogger(__name__)


class ApiSportsError(ProviderError):
    pass


def _headers() -> dict[str, str]:
    if not settings.apisports_api_key:
        raise MissingApiKeyError(
            "APISPORTS_API_KEY no está configurada (config o .env). "
            "Conseguir una en https://www.api-football.com/"
        )
    return {"x-apisports-key": settings.apisports_api_key}


def api_sports_get(path: str, params: dict[str, Any] | None = None) -> dict:
    """
    GET a la API-Sports. Descarta params en None.
    Raises ApiSportsError si la respuesta no es 200, si el cuerpo no es un objeto JSON,
    si trae `errors` o si vence el timeout.
    """
    url = f"{settings.apisports_base_url}{path}"
    clean = {k: v for k, v in (params or {}).items() if v is not None}
    try:
        r = requests.get(url, headers=_headers(), params=clean, timeout=settings.apisports_timeout)
    except requests.Timeout as e:
        raise ApiSportsError(
            f"API-Sports request timed out after {settings.apisports_timeout:g}s"
        ) from e
    except requests.RequestException as e:
        raise ApiSportsError(f"API-Sports request failed: {e}") from e

    if r.status_code != 200:
        raise ApiSportsError(f"API-Sports request failed: {r.status_code} {r.reason}")

    try:
        data = r.json()
    except ValueError as e:
        raise ApiSportsError("API-Sports returned invalid JSON") from e
    if not isinstance(data, dict):
        raise ApiSportsError(f"API-Sports returned unexpected payload: {type(data).__name__}")
    # la API devuelve 200 con errors = {} o [] cuando todo salió bien
    errors = data.get("errors")
    if errors:
        raise ApiSportsError(f"API-Sports returned errors: {errors}")
    return data


# -------------------------
# Mappers
# -------------------------
def map_fixture(raw: dict) -> MatchRecord:
    """Fixture crudo de la API -> MatchRecord."""
    fixture = raw.get("fixture") or {}
    teams = raw.get("teams") or {}
    home = teams.get("home") or {}
    away = teams.get("away") or {}
    goals = raw.get("goals") or {}
    league = raw.get("league") or {}

    return MatchRecord(
        id=fixture.get("id"),
        date=fixture.get("date") or "",
        status=(fixture.get("status") or {}).get("short"),
        home_id=home.get("id"),
        away_id=away.get("id"),
        home_name=home.get("name") or "",
        away_name=away.get("name") or "",
        home_goals=goals.get("home"),
        away_goals=goals.get("away"),
        league_id=league.get("id"),
        season=league.get("season"),
    )


def _pair(d: dict | None) -> dict[str, int | None]:
    d = d or {}
    return {"home": d.get("home"), "away": d.get("away")}


def map_fixture_summary(raw: dict) -> dict[str, Any]:
    """Fixture crudo -> resumen serializable (lo que devuelve /api/match)."""
    fixture = raw.get("fixture") or {}
    venue = fixture.get("venue") or {}
    status = fixture.get("status") or {}
    league = raw.get("league") or {}
    teams = raw.get("teams") or {}
    score = raw.get("score") or {}

    def _team(t: dict | None) -> dict[str, Any]:
        t = t or {}
        return {"id": t.get("id"), "name": t.get("name"), "logo": t.get("logo")}

    return {
        "id": fixture.get("id"),
        "date": fixture.get("date"),
        "timestamp": fixture.get("timestamp"),
        "venue": {
            "name": venue.get("name") or "Unknown",
            "city": venue.get("city") or "Unknown",
        },
        "status": {
            "short": status.get("short"),
            "long": status.get("long"),
            "elapsed": status.get("elapsed"),
        },
        "league": {
            "id": league.get("id"),
            "name": league.get("name"),
            "country": league.get("country"),
            "logo": league.get("logo"),
            "flag": league.get("flag"),
            "season": league.get("season"),
            "round": league.get("round"),
        },
        "teams": {"home": _team(teams.get("home")), "away": _team(teams.get("away"))},
        "goals": _pair(raw.get("goals")),
        "score": {
            "halftime": _pair(score.get("halftime")),
            "fulltime": _pair(score.get("fulltime")),
            "extratime": _pair(score.get("extratime")),
            "penalty": _pair(score.get("penalty")),
        },
    }


# tipo de estadística en la API -> key nuestra
STAT_TYPES: dict[str, str] = {
    "Shots on Goal": "shots_on_goal",
    "Shots off Goal": "shots_off_goal",
    "Total Shots": "total_shots",
    "Ball Possession": "possession",
    "Total passes": "passes",
    "Passes accurate": "pass_accuracy",
    "Fouls": "fouls",
    "Yellow Cards": "yellow_cards",
    "Red Cards": "red_cards",
    "Offsides": "offsides",
    "Corner Kicks": "corners",
}


def _stat_value(value: Any) -> int:
    """None => 0; "65%" => 65; strings no numéricos => 0."""
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    s = str(value).strip().rstrip("%")
    try:
        return int(s)
    except ValueError:
        return 0


def _team_stats(entry: dict) -> dict[str, int]:
    by_type = {s.get("type"): s.get("value") for s in (entry.get("statistics") or [])}
    return {key: _stat_value(by_type.get(api_type)) for api_type, key in STAT_TYPES.items()}


def map_match_details(raw: dict) -> dict[str, Any]:
    """Fixture + estadísticas (si vienen ambos equipos) + h2h (si viene)."""
    out: dict[str, Any] = {"fixture": map_fixture_summary(raw), "statistics": None, "h2h": None}

    stats = raw.get("statistics")
    if isinstance(stats, list) and len(stats) >= 2:
        out["statistics"] = {"home": _team_stats(stats[0]), "away": _team_stats(stats[1])}

    h2h = raw.get("h2h")
    if isinstance(h2h, list):
        out["h2h"] = [map_fixture_summary(f) for f in h2h]

    return out


# -------------------------
# Endpoints
# -------------------------
def get_fixture(fixture_id: int) -> dict | None:
    """Fixture crudo por id; None si la API no lo encuentra."""
    data = api_sports_get("/fixtures", params={"id": fixture_id})
    response = data.get("response") or []
    if not response:
        return None
    return response[0]


def get_team_history(
    team_id: int,
    league_id: int | None,
    season: int | None,
    last: int,
) -> list[MatchRecord]:
    """Últimos `last` partidos del equipo en la liga/temporada (incluye no terminados)."""
    data = api_sports_get(
        "/fixtures",
        params={"team": team_id, "league": league_id, "season": season, "last": last},
    )
    response = data.get("response") or []
    logger.debug("Historial team=%s league=%s season=%s: %d partidos", team_id, league_id, season, len(response))
    return [map_fixture(raw) for raw in response]
