"""
Configuración centralizada cargada desde variables de entorno.
Para producción: definir env vars o usar .env (python-dotenv).
"""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Raíz del proyecto (donde están core/, app/, config/)
BASE_DIR: Path = Path(__file__).resolve().parents[1]

# API-Sports (fixtures, historial por equipo, detalle de partido)
APISPORTS_API_KEY: str = (os.getenv("APISPORTS_API_KEY") or "").strip()
APISPORTS_BASE_URL: str = os.getenv("APISPORTS_BASE_URL", "https://v3.football.api-sports.io")
APISPORTS_TIMEOUT: float = float(os.getenv("APISPORTS_TIMEOUT", "10"))

# API Football-Data.org (listado de partidos por día)
FOOTBALL_DATA_API_KEY: str = (os.getenv("FOOTBALL_DATA_API_KEY") or "").strip()
FOOTBALL_DATA_BASE_URL: str = os.getenv("FOOTBALL_DATA_BASE_URL", "https://api.football-data.org/v4")

# Ligas del plan gratuito de Football-Data (se consultan una por una si no se pide liga)
FREE_LEAGUES: list[str] = ["PL", "CL", "BL1", "SA", "PD", "FL1", "ELC", "DED", "PPL", "BSA", "WC", "EC"]

# Modelo Poisson
MAX_GOALS_POISSON: int = int(os.getenv("POISSON_MAX_GOALS", "6"))

# Ventana de historial (cantidad de partidos pedidos por equipo)
HISTORY_WINDOW_MIN: int = 3
HISTORY_WINDOW_MAX: int = 50
DEFAULT_HISTORY_WINDOW: int = int(os.getenv("POISSON_DEFAULT_WINDOW", "10"))

# TTL de cache en memoria (segundos)
HISTORY_CACHE_TTL: int = int(os.getenv("POISSON_HISTORY_TTL", str(10 * 60)))
MATCH_CACHE_TTL: int = int(os.getenv("POISSON_MATCH_TTL", str(30 * 60)))
FIXTURES_CACHE_TTL: int = int(os.getenv("POISSON_FIXTURES_TTL", str(10 * 60)))

# App
DEBUG: bool = os.getenv("POISSON_DEBUG", "").lower() in ("1", "true", "yes")
LOG_LEVEL: str = os.getenv("POISSON_LOG_LEVEL", "INFO")


class Settings:
    """Objeto de configuración accesible en toda la app."""

    def __init__(self) -> None:
        self.base_dir = BASE_DIR

        self.apisports_api_key = APISPORTS_API_KEY
        self.apisports_base_url = APISPORTS_BASE_URL
        self.apisports_timeout = APISPORTS_TIMEOUT

        self.football_data_api_key = FOOTBALL_DATA_API_KEY
        self.football_data_base_url = FOOTBALL_DATA_BASE_URL
        self.free_leagues = FREE_LEAGUES

        self.max_goals_poisson = MAX_GOALS_POISSON

        self.history_window_min = HISTORY_WINDOW_MIN
        self.history_window_max = HISTORY_WINDOW_MAX
        self.default_history_window = DEFAULT_HISTORY_WINDOW

        self.history_cache_ttl = HISTORY_CACHE_TTL
        self.match_cache_ttl = MATCH_CACHE_TTL
        self.fixtures_cache_ttl = FIXTURES_CACHE_TTL

        self.debug = DEBUG
        self.log_level = LOG_LEVEL

    def has_apisports_key(self) -> bool:
        return bool(self.apisports_api_key)

    def has_football_data_key(self) -> bool:
        return bool(self.football_data_api_key)

    def is_valid_window(self, window: int) -> bool:
        return self.history_window_min <= window <= self.history_window_max


settings = Settings()
