"""
Errores de los proveedores remotos. El orquestador los deja pasar tal cual.
"""
from __future__ import annotations


class ProviderError(RuntimeError):
    """Falla del proveedor (HTTP != 200, payload con errors, timeout, red)."""


class MissingApiKeyError(ProviderError):
    """La API key del proveedor no está configurada (config o .env)."""
