"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en `generate` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from core.domain.errors import WizardError
from core.domain.models import WizardResult
from core.domain.steps import WizardStep


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (desactivado en modo `--json`)."""

    title = Text("PPS Wizard", style="bold cyan")
    subtitle = Text("Parcours de Prévention Santé • FFA", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def step_status(step: WizardStep) -> str:
    position = WizardStep.ordered().index(step) + 1
    total = len(WizardStep.ordered())
    return f"[{position}/{total}] {step.method} {step.label()}"


def build_result_panel(result: WizardResult) -> Panel:
    body = Text()
    body.append(result.code + "\n\n", style="bold green")
    body.append(f"Race date: {result.race_date.isoformat()}\n")
    body.append(f"Generated: {result.generated_at:%Y-%m-%d %H:%M} UTC", style="dim")
    return Panel(body, title=Text("PPS code", style="bold yellow"), border_style="green")


def build_error_panel(error: WizardError) -> Panel:
    body = Text()
    body.append(error.message + "\n", style="bold")
    if error.step is not None:
        body.append(f"Step: {error.step.label()}\n")
    body.append(f"Kind: {error.kind}", style="dim")
    return Panel(body, title=Text("Wizard failed", style="bold red"), border_style="red")
