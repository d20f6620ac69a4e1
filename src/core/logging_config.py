"""Configuración de logging.

Por qué RichHandler:
- La CLI ya imprime con Rich; los logs comparten consola y estilo.
- Los módulos solo hacen `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_NOISY_LOGGERS = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "openai": "WARNING",
    "whois": "ERROR",
}


def setup_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    """Configura el root logger (reemplaza handlers existentes)."""

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)

    for logger_name, logger_level in _NOISY_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, logger_level))
