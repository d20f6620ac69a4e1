"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (IA/DNS/WHOIS) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "brandscout"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "brandscout"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "brandscout"
    return Path.home() / ".config" / "brandscout"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# brandscout user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="BRANDSCOUT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request HTTP (diagnósticos).",
    )
    user_agent: str = Field(
        default="brandscout/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones HTTP.",
    )

    ai_api_key: str | None = Field(
        default=None,
        description="API key para el proveedor IA (compatible OpenAI).",
    )
    ai_base_url: str = Field(
        default="https://api.openai.com/v1",
        min_length=8,
        description="Base URL compatible OpenAI.",
    )
    ai_model: str = Field(
        default="gpt-4o-mini",
        min_length=1,
        description="Modelo usado para generar nombres.",
    )
    ai_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout para llamadas al proveedor IA (segundos).",
    )
    ai_temperature: float = Field(
        default=0.5,
        ge=0.0,
        le=2.0,
        description="Temperatura de muestreo.",
    )
    ai_max_tokens: int = Field(
        default=3500,
        ge=1,
        description="Tokens máximos de salida por llamada.",
    )
    ai_max_attempts: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Intentos totales (fallos de red y JSON inválido comparten el presupuesto).",
    )
    ai_backoff_seconds: float = Field(
        default=5.0,
        ge=0.0,
        description="Base del backoff lineal ante fallos de transporte.",
    )

    brand_brief: str = Field(
        default="an online bookstore",
        min_length=1,
        description="Descripción del negocio para el que se buscan nombres.",
    )
    batch_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Nombres pedidos al modelo en cada pasada.",
    )
    max_words: int = Field(
        default=2,
        ge=1,
        le=5,
        description="Palabras máximas por nombre candidato.",
    )
    target_count: int = Field(
        default=20,
        ge=1,
        description="Nombres aceptados necesarios para terminar.",
    )
    tld: str = Field(
        default=".com",
        min_length=2,
        description="TLD verificado para cada candidato.",
    )

    dns_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Tiempo máximo total de una resolución DNS.",
    )
    whois_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Tiempo máximo de una consulta WHOIS.",
    )

    default_language: Language = Field(
        default_factory=Language.default,
        description="Idioma por defecto para prompts (en/es).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("tld")
    @classmethod
    def _normalize_tld(cls, value: str) -> str:
        value = value.strip().lower()
        return value if value.startswith(".") else f".{value}"
