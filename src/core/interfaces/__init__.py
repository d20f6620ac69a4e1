"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.stages import DomainProber, NameGenerator, RegistrationFetcher

__all__ = [
    "DomainProber",
    "NameGenerator",
    "RegistrationFetcher",
]
