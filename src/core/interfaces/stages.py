"""Contratos de las etapas del pipeline.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que adaptadores (OpenAI, dnspython, python-whois) sean
  intercambiables y testeables sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RegistrationInfo


@runtime_checkable
class NameGenerator(Protocol):
    """Produce una tanda de candidatos por pasada."""

    async def generate(self) -> list[str]:
        ...


@runtime_checkable
class DomainProber(Protocol):
    """Heurística rápida: ¿el dominio del candidato parece libre?

    Reglas de diseño:
    - Nunca lanza: cualquier fallo se traduce a `True`.
    """

    async def probe(self, candidate_name: str) -> bool:
        ...


@runtime_checkable
class RegistrationFetcher(Protocol):
    """Recupera evidencia de registro de un dominio.

    Reglas de diseño:
    - Nunca lanza: un fallo devuelve `RegistrationInfo()` vacío.
    - Sin estado mutable compartido (se invoca en paralelo).
    """

    async def fetch_registration(self, domain: str) -> RegistrationInfo:
        ...
