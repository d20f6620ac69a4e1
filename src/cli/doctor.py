"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.dns_prober import build_resolver
from adapters.http_client import check_endpoint
from adapters.whois_fetcher import WhoisFetcher
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_KNOWN_DOMAIN = "example.com"


async def _check_dns(settings: AppSettings) -> tuple[bool, str]:
    try:
        answer = await build_resolver(settings).resolve(_KNOWN_DOMAIN, "A")
    except Exception as exc:
        return False, f"{type(exc).__name__}: {exc}"
    return True, f"{_KNOWN_DOMAIN} -> {', '.join(str(r) for r in answer)}"


async def _check_whois(settings: AppSettings) -> tuple[bool, str]:
    info = await WhoisFetcher(settings).fetch_registration(_KNOWN_DOMAIN)
    if info.has_evidence:
        return True, f"registrar={info.registrar or '?'}"
    # Indistinguible de "dominio libre": todo candidato pasaría este filtro.
    return False, "No registration data for a registered domain (WHOIS unreachable?)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="brandscout Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if bool(settings.ai_api_key):
        table.add_row("AI key", "OK", "Remote AI enabled")
    else:
        table.add_row("AI key", "MISSING", "Set BRANDSCOUT_AI_API_KEY or run `doctor setup-ai`")
    table.add_row("AI base_url", "OK", settings.ai_base_url)
    table.add_row("AI model", "OK", settings.ai_model)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(check_endpoint(settings.ai_base_url, settings))
    table.add_row("AI endpoint", "OK" if ok_http else "FAIL", detail_http)

    ok_dns, detail_dns = asyncio.run(_check_dns(settings))
    table.add_row("DNS resolution", "OK" if ok_dns else "FAIL", detail_dns)

    ok_whois, detail_whois = asyncio.run(_check_whois(settings))
    table.add_row("WHOIS lookup", "OK" if ok_whois else "FAIL", detail_whois)

    _console.print(table)

    if not ok_dns:
        _console.print(
            "\n[yellow]Note:[/yellow] Without DNS every candidate looks available; only WHOIS will filter."
        )
    if not ok_whois:
        _console.print(
            "\n[yellow]Note:[/yellow] Without WHOIS, names without A records are accepted unchecked."
        )


@app.command(name="setup-ai")
def setup_ai() -> None:
    """Interactive AI setup (stores config in the user config .env)."""

    provider = typer.prompt(
        "AI provider",
        default="openai",
        show_default=True,
    ).strip().lower()

    presets: dict[str, dict[str, str]] = {
        "openai": {"BRANDSCOUT_AI_BASE_URL": "https://api.openai.com/v1", "BRANDSCOUT_AI_MODEL": "gpt-4o-mini"},
        "deepseek": {"BRANDSCOUT_AI_BASE_URL": "https://api.deepseek.com", "BRANDSCOUT_AI_MODEL": "deepseek-chat"},
        "groq": {"BRANDSCOUT_AI_BASE_URL": "https://api.groq.com/openai/v1", "BRANDSCOUT_AI_MODEL": "llama-3.3-70b-versatile"},
        "openrouter": {"BRANDSCOUT_AI_BASE_URL": "https://openrouter.ai/api/v1", "BRANDSCOUT_AI_MODEL": "openai/gpt-4o-mini"},
        "ollama": {"BRANDSCOUT_AI_BASE_URL": "http://localhost:11434/v1", "BRANDSCOUT_AI_MODEL": "llama3.1"},
    }

    values = presets.get(provider, {}).copy()
    if not values:
        _console.print("[yellow]Unknown provider preset. You can still enter custom values.[/yellow]")

    base_url = typer.prompt("AI base URL", default=values.get("BRANDSCOUT_AI_BASE_URL", ""), show_default=True).strip()
    model = typer.prompt("AI model", default=values.get("BRANDSCOUT_AI_MODEL", ""), show_default=True).strip()
    api_key = typer.prompt("AI API key", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not model:
        raise typer.BadParameter("base_url and model are required")

    env_path = write_user_env_vars(
        {
            "BRANDSCOUT_AI_BASE_URL": base_url,
            "BRANDSCOUT_AI_MODEL": model,
            "BRANDSCOUT_AI_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved AI config to:[/green] {env_path}")
