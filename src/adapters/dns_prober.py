"""Prober DNS (dnspython, asíncrono).

Heurística rápida de disponibilidad:
- Si el dominio resuelve registros A, está registrado.
- Cualquier fallo (NXDOMAIN, timeout, SERVFAIL, nombre inválido...) se
  interpreta como "parece libre". DNS caído != dominio libre; el agregador
  compensa con WHOIS.
"""

from __future__ import annotations

import logging

import dns.asyncresolver

from core.config import AppSettings
from core.domain.models import domain_for

logger = logging.getLogger(__name__)


def build_resolver(settings: AppSettings) -> dns.asyncresolver.Resolver:
    resolver = dns.asyncresolver.Resolver()
    resolver.timeout = settings.dns_timeout_seconds
    resolver.lifetime = settings.dns_timeout_seconds
    return resolver


class DnsProber:
    """Implementa `core.interfaces.DomainProber` con un único intento."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        resolver: dns.asyncresolver.Resolver | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._resolver = resolver or build_resolver(self._settings)

    async def probe(self, candidate_name: str) -> bool:
        domain = domain_for(candidate_name, self._settings.tld)
        try:
            answer = await self._resolver.resolve(domain, "A")
        except Exception as exc:
            logger.debug("DNS lookup for %s failed (%s: %s), assuming available", domain, type(exc).__name__, exc)
            return True

        logger.debug("%s resolves to %s", domain, ", ".join(str(r) for r in answer))
        return False
