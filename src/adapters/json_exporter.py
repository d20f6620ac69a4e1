"""Exportación JSON de los nombres aceptados.

Por qué JSON:
- Interoperabilidad con otras herramientas (registradores, hojas de cálculo).
- Solo se escribe tras una ejecución completa; un error fatal no deja
  resultados parciales.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from core.domain.models import AvailabilityRecord


def export_records_json(
    *,
    records: Sequence[AvailabilityRecord],
    output_path: Path,
    passes: int | None = None,
) -> Path:
    """Exporta los registros a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "passes": passes,
        "count": len(records),
        "brands": [
            r.model_dump(mode="json", exclude={"dns_checked", "whois_checked"}) for r in records
        ],
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
