"""Política de reintentos del invocador IA.

Por qué una sola política:
- Los fallos de transporte y las salidas malformadas comparten el mismo
  presupuesto de intentos; solo cambia la espera entre intentos.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class RetryPolicy:
    """Presupuesto compartido + backoff lineal para fallos de transporte.

    `attempt` es el índice (base 0) del intento que falló, así que el primer
    reintento por transporte es inmediato y luego la espera crece
    `base_delay` por intento.
    """

    max_attempts: int = 10
    base_delay: float = 5.0

    def delay_for(self, kind: ErrorKind, attempt: int) -> float:
        if kind is ErrorKind.MALFORMED:
            return 0.0
        return attempt * self.base_delay

    def is_last(self, attempt: int) -> bool:
        return attempt + 1 >= self.max_attempts
