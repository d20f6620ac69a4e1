"""Adaptador de generación de nombres (OpenAI SDK, proveedores compatibles).

Responsabilidad:
- Invocar el modelo forzando una única tool-call con esquema JSON.
- Reintentar ante fallos de red (backoff lineal) y ante salida malformada
  (inmediato), con un único presupuesto de intentos.
- Normalizar la lista de candidatos devuelta.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Awaitable, Callable, TypeVar

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config import AppSettings
from core.domain.errors import MalformedOutputError, MaxRetriesExceeded, TransportError
from core.domain.language import Language
from core.services.retry import ErrorKind, RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)

BRAND_RULES = (
    "1. The brand name should be short, succinct, and clear.\n"
    "2. The brand name should be memorable.\n"
    "3. The brand name should be easy to pronounce.\n"
    "4. The brand name should be easy to spell.\n"
    "5. The brand name should be unique.\n"
    "6. The brand name should be timeless.\n"
    "7. The brand name should be versatile.\n"
    "8. The brand name should not have more than {max_words} words.\n"
)


class BrandNamesPayload(BaseModel):
    """Esquema de salida exigido al modelo."""

    model_config = ConfigDict(populate_by_name=True)

    brand_names: list[str] = Field(
        ...,
        alias="brandNames",
        description="Array of brand names",
    )


def is_local_base_url(url: str) -> bool:
    url_l = (url or "").strip().lower()
    return url_l.startswith("http://localhost") or url_l.startswith("http://127.0.0.1") or url_l.startswith(
        "http://0.0.0.0"
    )


def build_client(settings: AppSettings) -> AsyncOpenAI:
    api_key = (settings.ai_api_key or "").strip()
    if not api_key:
        # Providers locales (Ollama, LM Studio) aceptan cualquier key.
        if not is_local_base_url(settings.ai_base_url):
            raise ValueError("Missing AI API key (set BRANDSCOUT_AI_API_KEY)")
        api_key = "local"

    # Los reintentos los gestiona `invoke_structured`, no el SDK.
    return AsyncOpenAI(
        api_key=api_key,
        base_url=settings.ai_base_url,
        timeout=settings.ai_timeout_seconds,
        max_retries=0,
    )


def _extract_json_object(text: str) -> str:
    """Obtiene el primer objeto JSON presente en la respuesta del proveedor."""
    match = _JSON_FENCE_RE.search(text)
    if match:
        return match.group(1).strip()

    stripped = text.strip()
    if stripped.startswith("{") and stripped.endswith("}"):
        return stripped

    start = stripped.find("{")
    end = stripped.rfind("}")
    if 0 <= start < end:
        return stripped[start : end + 1]

    raise MalformedOutputError("Could not locate a JSON object in the AI provider response.")


def _response_arguments(response: Any) -> str:
    """Texto JSON de la respuesta: tool-call primero, `content` como fallback."""

    try:
        message = response.choices[0].message
    except (AttributeError, IndexError, TypeError) as exc:
        raise MalformedOutputError("Response has no choices") from exc

    tool_calls = getattr(message, "tool_calls", None) or []
    if tool_calls:
        arguments = tool_calls[0].function.arguments
        if isinstance(arguments, str) and arguments.strip():
            return arguments

    content = getattr(message, "content", None)
    if isinstance(content, str) and content.strip():
        return _extract_json_object(content)

    raise MalformedOutputError("Response carries neither a tool call nor content")


def parse_structured_output(response: Any, output_model: type[T]) -> T:
    text = _response_arguments(response)
    try:
        return output_model.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise MalformedOutputError(str(exc)) from exc


def build_tool(output_model: type[BaseModel], function_name: str) -> dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": function_name,
            "parameters": output_model.model_json_schema(by_alias=True),
        },
    }


async def invoke_structured(
    *,
    client: AsyncOpenAI,
    messages: list[dict[str, str]],
    output_model: type[T],
    function_name: str,
    settings: AppSettings,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Llama al modelo y devuelve su salida validada contra `output_model`.

    Lanza `MaxRetriesExceeded` cuando se agota `policy.max_attempts`.
    `sleep` espera el backoff entre intentos de transporte.
    """

    policy = policy or RetryPolicy(
        max_attempts=settings.ai_max_attempts,
        base_delay=settings.ai_backoff_seconds,
    )
    tool = build_tool(output_model, function_name)
    last_error: Exception | None = None

    for attempt in range(policy.max_attempts):
        try:
            try:
                response = await client.chat.completions.create(
                    model=settings.ai_model,
                    messages=messages,  # type: ignore[arg-type]
                    tools=[tool],  # type: ignore[list-item]
                    tool_choice={"type": "function", "function": {"name": function_name}},
                    temperature=settings.ai_temperature,
                    max_tokens=settings.ai_max_tokens,
                )
            except openai.APIError as exc:
                raise TransportError(str(exc)) from exc
            return parse_structured_output(response, output_model)

        except TransportError as exc:
            last_error = exc
            kind = ErrorKind.TRANSPORT
            status = getattr(exc.__cause__, "status_code", None)
            logger.warning(
                "AI call failed (attempt %d/%d, status=%s): %s",
                attempt + 1,
                policy.max_attempts,
                status,
                exc,
            )

        except MalformedOutputError as exc:
            last_error = exc
            kind = ErrorKind.MALFORMED
            logger.warning(
                "AI response did not match the %s schema (attempt %d/%d), retrying",
                function_name,
                attempt + 1,
                policy.max_attempts,
            )

        if policy.is_last(attempt):
            break
        delay = policy.delay_for(kind, attempt)
        if delay > 0:
            logger.info("Retrying in %.0f seconds...", delay)
            await sleep(delay)

    raise MaxRetriesExceeded(policy.max_attempts, last_error)


def normalize_candidates(names: list[str], *, max_words: int) -> list[str]:
    out: list[str] = []
    for raw in names:
        name = " ".join(str(raw).split())
        if not name:
            logger.debug("Dropping blank candidate")
            continue
        if len(name.split(" ")) > max_words:
            logger.info("Dropping %r: more than %d words", name, max_words)
            continue
        out.append(name)
    return out


def build_messages(*, brief: str, count: int, max_words: int, language: Language) -> list[dict[str, str]]:
    rules = BRAND_RULES.format(max_words=max_words)
    if language == Language.SPANISH:
        system = (
            "Eres un experto en naming de marcas. Propones una lista de "
            f"{count} posibles nombres de dominio para una marca que estamos creando.\n\n"
            f"{rules}\n"
            "Los nombres pueden estar en español, pero deben ser válidos como dominio."
        )
        user = f"Genera una lista de {count} posibles nombres de marca .com para {brief}."
    else:
        system = (
            "You are an expert brand namer. You come up with a list of "
            f"{count} possible domain names for a brand we are creating.\n\n{rules}"
        )
        user = f"Please generate a list of {count} possible .com brand names for {brief}."
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


class AINameGenerator:
    """Generador de candidatos respaldado por el invocador resiliente."""

    function_name = "GenBrands"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: AsyncOpenAI | None = None,
        language: Language | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_client(self._settings)
        self._language = language or self._settings.default_language

    async def generate(self) -> list[str]:
        messages = build_messages(
            brief=self._settings.brand_brief,
            count=self._settings.batch_size,
            max_words=self._settings.max_words,
            language=self._language,
        )
        payload = await invoke_structured(
            client=self._client,
            messages=messages,
            output_model=BrandNamesPayload,
            function_name=self.function_name,
            settings=self._settings,
        )
        names = normalize_candidates(payload.brand_names, max_words=self._settings.max_words)
        logger.info("Generated %d %s candidates: %s", len(names), self._language.label(), ", ".join(names))
        return names
