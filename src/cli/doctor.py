"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.html_tokens import extract_session_tokens
from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file
from core.domain.errors import WizardError
from core.domain.steps import WizardStep
from core.services.request_builder import build_url

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_entry(settings: AppSettings) -> tuple[bool, str]:
    """GET the wizard entry page and look for both session tokens."""

    try:
        url = build_url(WizardStep.ENTRY, settings.base_url)
        async with build_async_client(settings) as client:
            response = await client.get(url)
        extract_session_tokens(response.text)
        return True, f"HTTP {response.status_code}, tokens present"
    except WizardError as exc:
        return False, str(exc)
    except Exception as exc:
        return False, repr(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="PPS Wizard Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    ok_entry, detail_entry = asyncio.run(_check_entry(settings))
    table.add_row("Wizard entry page", "OK" if ok_entry else "FAIL", detail_entry)

    _console.print(table)

    if not ok_entry:
        _console.print(
            "\n[yellow]Note:[/yellow] If the page loads but tokens are missing, the wizard layout may have changed."
        )
        raise typer.Exit(code=1)
