"""CLI principal (Typer).

Ocupa el lugar del formulario original: recoge los seis campos, aplica
las reglas del formulario y delega en `core.services.wizard_session`.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_result_json, result_to_json
from cli import doctor
from cli.ui_components import build_error_panel, build_result_panel, print_banner, step_status
from core.config import AppSettings
from core.domain.errors import WizardError
from core.domain.gender import Gender
from core.domain.models import UserInput, WizardResult
from core.services.wizard_session import PipelineHooks, generate_pps_code
from core.validation import FormValidationError, validate_user_input

app = typer.Typer(
    no_args_is_help=True,
    help="Generate a PPS (Parcours de Prévention Santé) code from the command line.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

EXIT_WIZARD_FAILED = 1
EXIT_INVALID_INPUT = 2


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def generate(
    race_date: datetime = typer.Option(..., "--race-date", formats=["%Y-%m-%d"], help="Date of your next race."),
    gender: Gender = typer.Option(Gender.default(), "--gender", case_sensitive=False, help="Sex declared on the form."),
    last_name: str = typer.Option(..., "--last-name", help="Last name."),
    first_name: str = typer.Option(..., "--first-name", help="First name."),
    birthdate: datetime = typer.Option(..., "--birthdate", formats=["%Y-%m-%d"], help="Birthdate."),
    email: str = typer.Option(..., "--email", help="Email address."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the result as JSON to this path."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON instead of a panel."),
) -> None:
    """Fill in the PPS wizard and print the generated code."""

    user_input = UserInput(
        race_date=race_date.date(),
        gender=gender,
        last_name=last_name.strip(),
        first_name=first_name.strip(),
        birthdate=birthdate.date(),
        email=email.strip(),
    )

    try:
        validate_user_input(user_input)
    except FormValidationError as exc:
        for problem in exc.problems:
            _err_console.print(f"[red]Invalid input:[/red] {problem}")
        raise typer.Exit(code=EXIT_INVALID_INPUT)

    if not as_json:
        print_banner(_console)

    try:
        result = _run_wizard(user_input, show_progress=not as_json)
    except WizardError as exc:
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=EXIT_WIZARD_FAILED)

    if as_json:
        _console.print_json(result_to_json(result))
    else:
        _console.print(build_result_panel(result))

    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _err_console.print(f"[green]Saved result to:[/green] {path}")


def _run_wizard(user_input: UserInput, *, show_progress: bool) -> WizardResult:
    settings = AppSettings()
    if not show_progress:
        return asyncio.run(generate_pps_code(user_input, settings=settings))

    with _console.status("Starting…") as status:
        hooks = PipelineHooks(step_started=lambda step: status.update(step_status(step)))
        return asyncio.run(generate_pps_code(user_input, settings=settings, hooks=hooks))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
