"""
Cache en memoria con TTL por entrada.
Se construye explícitamente (una instancia por proceso, la crea app.main) y se pasa a quien la use.
La expiración se revisa al leer: no hay hilo de limpieza.
"""
from __future__ import annotations

import threading
import time
from typing import Any, Callable

DEFAULT_TTL_SECONDS = 5 * 60


def history_key(team_id: int, league_id: int | None, season: int | None, window: int) -> str:
    return f"history:{team_id}:{league_id}:{season}:{window}"


def fixtures_key(date: str, league: str | None) -> str:
    return f"fixtures:{date}:{league or 'all'}"


def match_key(fixture_id: int) -> str:
    return f"match:{fixture_id}"


class MemoryCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, data: Any, ttl_seconds: float = DEFAULT_TTL_SECONDS) -> None:
        """Guarda (o pisa) key; vence a los ttl_seconds."""
        expiry = self._clock() + ttl_seconds
        with self._lock:
            self._entries[key] = (data, expiry)

    def get(self, key: str, default: Any = None) -> Any:
        """Devuelve el valor vigente o default. Si venció, lo borra."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            data, expiry = entry
            if self._clock() > expiry:
                del self._entries[key]
                return default
            return data

    def has(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def cleanup(self) -> int:
        """Borra todas las entradas vencidas. Devuelve cuántas borró."""
        now = self._clock()
        with self._lock:
            expired = [k for k, (_data, expiry) in self._entries.items() if now > expiry]
            for k in expired:
                del self._entries[k]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
