"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `hunt` y `check`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AvailabilityRecord
from core.services.availability import is_accepted


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("BRANDSCOUT", style="bold cyan")
    subtitle = Text("Brand names • DNS • WHOIS", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_records_table(records: Sequence[AvailabilityRecord], *, title: str = "Candidates") -> Table:
    """Tabla con el veredicto y la evidencia de cada candidato."""

    table = Table(title=title)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Domain", style="white")
    table.add_column("DNS", style="white")
    table.add_column("Registrar", style="magenta")
    table.add_column("Expires", style="dim")
    table.add_column("Verdict")

    for record in records:
        info = record.registration
        verdict = Text("available", style="green") if is_accepted(record) else Text("taken", style="red")
        table.add_row(
            record.name,
            record.domain,
            "no records" if record.dns_available else "resolves",
            info.registrar or "",
            info.expiration_date or "",
            verdict,
        )
    return table


def build_summary_panel(*, accepted: int, target: int, passes: int) -> Panel:
    body = Text()
    body.append(f"Accepted: {accepted}/{target}\n", style="bold")
    body.append(f"Passes: {passes}")
    style = "green" if accepted >= target else "yellow"
    return Panel(body, title=Text("Summary", style=f"bold {style}"), border_style=style)
