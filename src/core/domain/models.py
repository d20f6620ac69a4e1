"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Facilita la serialización (exportación JSON) de los resultados.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import StageOrderError


def domain_for(name: str, tld: str = ".com") -> str:
    """Dominio verificado para un candidato: nombre en minúsculas + TLD."""

    return f"{name.lower()}{tld}"


class RegistrationInfo(BaseModel):
    """Datos de registro recuperados vía WHOIS.

    Por qué todos opcionales:
    - Un WHOIS fallido o sin coincidencias produce un objeto vacío, que el
      agregador interpreta como "sin evidencia de registro".
    """

    registrar: str | None = Field(
        default=None,
        description="Registrador del dominio (línea 'Registrar:').",
    )
    registrar_server: str | None = Field(
        default=None,
        description="Servidor WHOIS del registrador (línea 'Registrar WHOIS Server:').",
    )
    expiration_date: str | None = Field(
        default=None,
        description="Fecha de expiración tal como la reporta el registrador.",
    )

    def populated_fields(self) -> list[str]:
        return [name for name, value in self.model_dump().items() if value]

    @property
    def has_evidence(self) -> bool:
        return bool(self.populated_fields())


class AvailabilityRecord(BaseModel):
    """Estado de verificación de un candidato.

    Ciclo de vida:
    - Se crea con `dns_available=False` y registro vacío.
    - `mark_dns` lo muta una vez (prober), luego `mark_registration` una vez
      (fetcher). Después no cambia.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Nombre de marca candidato, tal como lo propuso el modelo.",
    )
    domain: str = Field(
        ...,
        min_length=1,
        description="Dominio verificado para el candidato.",
    )
    dns_available: bool = Field(
        default=False,
        description="True si la resolución DNS no encontró registros A.",
    )
    registration: RegistrationInfo = Field(
        default_factory=RegistrationInfo,
        description="Evidencia de registro obtenida por WHOIS.",
    )
    dns_checked: bool = Field(default=False, description="El prober ya corrió.")
    whois_checked: bool = Field(default=False, description="El fetcher ya corrió.")

    @classmethod
    def for_candidate(cls, name: str, *, tld: str = ".com") -> "AvailabilityRecord":
        return cls(name=name, domain=domain_for(name, tld))

    @property
    def is_complete(self) -> bool:
        return self.dns_checked and self.whois_checked

    def mark_dns(self, available: bool) -> None:
        if self.dns_checked:
            raise StageOrderError(f"DNS stage already recorded for {self.domain}")
        self.dns_available = available
        self.dns_checked = True

    def mark_registration(self, info: RegistrationInfo) -> None:
        if not self.dns_checked:
            raise StageOrderError(f"WHOIS stage recorded before DNS for {self.domain}")
        if self.whois_checked:
            raise StageOrderError(f"WHOIS stage already recorded for {self.domain}")
        self.registration = info
        self.whois_checked = True
