"""
Dependencias de la aplicación FastAPI (inyección de config y cache).
"""
from __future__ import annotations

from fastapi import Request

from config.settings import Settings, settings
from data.cache import MemoryCache


def get_settings() -> Settings:
    return settings


def get_cache(request: Request) -> MemoryCache:
    """La instancia que creó app.main al arrancar."""
    return request.app.state.cache
