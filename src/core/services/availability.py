"""Agregador de disponibilidad.

Combina las dos señales independientes (DNS + WHOIS) en un veredicto por
candidato. DNS sin registros es una señal débil (dominios aparcados o mal
configurados no tienen A), así que además exigimos que WHOIS no muestre
evidencia de registro.

Limitación conocida: un WHOIS inalcanzable devuelve un `RegistrationInfo`
vacío, indistinguible de "confirmado sin registro".
"""

from __future__ import annotations

from typing import Iterable

from core.domain.errors import StageOrderError
from core.domain.models import AvailabilityRecord


def is_accepted(record: AvailabilityRecord) -> bool:
    return record.dns_available and not record.registration.has_evidence


def aggregate(records: Iterable[AvailabilityRecord]) -> list[AvailabilityRecord]:
    """Subconjunto aceptado, en el orden de entrada."""

    accepted: list[AvailabilityRecord] = []
    for record in records:
        if not record.is_complete:
            raise StageOrderError(f"Cannot aggregate partial record for {record.domain}")
        if is_accepted(record):
            accepted.append(record)
    return accepted
