"""Servicios del Core (orquestación y reglas de negocio)."""

from core.services.availability import aggregate, is_accepted
from core.services.retry import ErrorKind, RetryPolicy
from core.services.run_loop import (
    PassResult,
    RunHooks,
    RunState,
    run_pass,
    run_until_threshold,
    verify_candidates,
)

__all__ = [
    "ErrorKind",
    "PassResult",
    "RetryPolicy",
    "RunHooks",
    "RunState",
    "aggregate",
    "is_accepted",
    "run_pass",
    "run_until_threshold",
    "verify_candidates",
]
