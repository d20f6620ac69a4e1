"""Errores del dominio.

Por qué un módulo aparte:
- Los adaptadores clasifican fallos de librerías externas (openai) en estos
  tipos, y el Core decide qué se reintenta y qué es fatal.
- Solo `MaxRetriesExceeded` debe llegar a la CLI.
"""

from __future__ import annotations


class BrandScoutError(Exception):
    """Base de todos los errores propios."""


class TransportError(BrandScoutError):
    """Fallo de red/servicio al llamar al proveedor IA."""


class MalformedOutputError(BrandScoutError):
    """La respuesta del proveedor no cumple el esquema JSON pedido."""


class MaxRetriesExceeded(BrandScoutError):
    """Se agotó el presupuesto de intentos del invocador IA."""

    def __init__(self, attempts: int, last_error: Exception | None = None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {type(last_error).__name__}: {last_error}" if last_error else ""
        super().__init__(f"Maximum retries reached after {attempts} attempts{detail}")


class StageOrderError(BrandScoutError):
    """Un `AvailabilityRecord` se mutó fuera de orden o se agregó incompleto."""
