"""Fetcher WHOIS (python-whois).

Responsabilidad:
- Consultar WHOIS para un dominio y extraer registrador, servidor WHOIS del
  registrador y fecha de expiración del texto crudo.
- Nunca propagar errores: un fallo equivale a "sin evidencia de registro".

Nota: `whois.whois` es bloqueante, se ejecuta en un thread.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Callable

import whois
from whois.exceptions import PywhoisError

from core.config import AppSettings
from core.domain.models import RegistrationInfo

logger = logging.getLogger(__name__)

_FIELD_PREFIXES: tuple[tuple[str, str], ...] = (
    ("Registrar WHOIS Server:", "registrar_server"),
    ("Registrar:", "registrar"),
    ("Registrar Registration Expiration Date:", "expiration_date"),
)


def parse_whois_text(text: str) -> RegistrationInfo:
    """Extrae campos por prefijo literal de línea; el resto se ignora."""

    fields: dict[str, str] = {}
    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        for prefix, field_name in _FIELD_PREFIXES:
            if not line.startswith(prefix):
                continue
            _, sep, value = line.partition(": ")
            value = value.strip()
            if sep and value:
                fields[field_name] = value
            break
    return RegistrationInfo(**fields)


def _default_lookup(domain: str, *, timeout: int) -> str:
    entry = whois.whois(domain, quiet=True, timeout=timeout)
    return getattr(entry, "text", "") or ""


class WhoisFetcher:
    """Implementa `core.interfaces.RegistrationFetcher`.

    `lookup` recibe un dominio y devuelve el texto WHOIS crudo; se puede
    sustituir en tests.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        lookup: Callable[[str], str] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._lookup = lookup or partial(
            _default_lookup,
            timeout=max(1, int(self._settings.whois_timeout_seconds)),
        )

    async def fetch_registration(self, domain: str) -> RegistrationInfo:
        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(self._lookup, domain),
                timeout=self._settings.whois_timeout_seconds,
            )
        except PywhoisError as exc:
            # python-whois reporta así los dominios sin registro.
            logger.debug("No WHOIS record for %s: %s", domain, exc)
            return RegistrationInfo()
        except Exception as exc:
            logger.warning("Error performing WHOIS lookup for %s: %s: %s", domain, type(exc).__name__, exc)
            return RegistrationInfo()

        info = parse_whois_text(text)
        if info.has_evidence:
            logger.debug("WHOIS evidence for %s: %s", domain, ", ".join(info.populated_fields()))
        return info
