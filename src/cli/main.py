"""CLI de brandscout (Typer + Rich).

Por qué la CLI es delgada:
- Toda la orquestación vive en `core.services.run_loop`; aquí solo se
  traduce input del usuario a `AppSettings` y se pintan resultados.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.ai_namer import AINameGenerator
from adapters.dns_prober import DnsProber
from adapters.json_exporter import export_records_json
from adapters.whois_fetcher import WhoisFetcher
from cli import doctor
from cli.ui_components import build_records_table, build_summary_panel, print_banner
from core.config import AppSettings
from core.domain.errors import MaxRetriesExceeded
from core.domain.language import Language
from core.logging_config import setup_logging
from core.services.availability import aggregate
from core.services.run_loop import PassResult, RunHooks, run_until_threshold, verify_candidates

app = typer.Typer(no_args_is_help=True, help="Generate brand names and keep the ones whose domain looks free.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _load_settings(**overrides: Any) -> AppSettings:
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return AppSettings(**values)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    setup_logging("INFO" if verbose else settings.log_level)


@app.command()
def hunt(
    brief: Optional[str] = typer.Option(None, "--brief", "-b", help="What the brand is for."),
    target: Optional[int] = typer.Option(None, "--target", "-t", help="Accepted names needed to stop."),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", help="Names requested per pass."),
    tld: Optional[str] = typer.Option(None, "--tld", help="TLD to verify (default .com)."),
    max_passes: Optional[int] = typer.Option(None, "--max-passes", min=1, help="Stop after N passes."),
    dedupe: bool = typer.Option(False, "--dedupe", help="Skip names already accepted."),
    spanish: bool = typer.Option(False, "--spanish", help="Prompt the model in Spanish."),
    export_json: Optional[Path] = typer.Option(None, "--export-json", help="Write accepted names to JSON."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level."),
) -> None:
    """Loop generation + verification until enough names are accepted."""

    settings = _load_settings(brand_brief=brief, target_count=target, batch_size=batch_size, tld=tld)
    _configure_logging(settings, verbose)
    if not no_banner:
        print_banner(_console)

    language = Language.SPANISH if spanish else settings.default_language
    try:
        generator = AINameGenerator(settings, language=language)
    except ValueError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    def on_pass_started(number: int) -> None:
        _console.rule(f"Pass {number}")

    def on_candidates(number: int, names: list[str]) -> None:
        _console.print(f"[dim]Candidates:[/dim] {', '.join(names) or '(none)'}")

    def on_pass_finished(result: PassResult) -> None:
        _console.print(build_records_table(result.records, title=f"Pass {result.state.passes}"))
        _console.print(
            f"Added [bold]{result.added}[/bold] this pass, "
            f"total [bold]{len(result.state.accepted)}[/bold]/{settings.target_count}"
        )

    hooks = RunHooks(
        pass_started=on_pass_started,
        candidates_generated=on_candidates,
        pass_finished=on_pass_finished,
    )

    try:
        state = asyncio.run(
            run_until_threshold(
                generator=generator,
                prober=DnsProber(settings),
                fetcher=WhoisFetcher(settings),
                target_count=settings.target_count,
                tld=settings.tld,
                dedupe=dedupe,
                max_passes=max_passes,
                hooks=hooks,
            )
        )
    except MaxRetriesExceeded as exc:
        _console.print(f"[red]Aborting:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    _console.print(build_records_table(list(state.accepted), title="Available brands"))
    _console.print(
        build_summary_panel(accepted=len(state.accepted), target=settings.target_count, passes=state.passes)
    )

    if export_json:
        path = export_records_json(records=list(state.accepted), output_path=export_json, passes=state.passes)
        _console.print(f"[green]Saved JSON:[/green] {path}")


@app.command()
def check(
    names: List[str] = typer.Argument(..., help="Brand names to verify."),
    tld: Optional[str] = typer.Option(None, "--tld", help="TLD to verify (default .com)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level."),
) -> None:
    """Verify explicit names (no AI): DNS probe + WHOIS cross-check."""

    settings = _load_settings(tld=tld)
    _configure_logging(settings, verbose)

    records = asyncio.run(
        verify_candidates(
            names=names,
            prober=DnsProber(settings),
            fetcher=WhoisFetcher(settings),
            tld=settings.tld,
        )
    )
    accepted = aggregate(records)
    _console.print(build_records_table(records))
    _console.print(f"{len(accepted)}/{len(records)} look available.")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
