"""Reglas del formulario PPS.

Reproduce las condiciones que habilitan el botón "Generate" del formulario:
- apellido, nombre y email no vacíos;
- fecha de carrera entre (ahora - 1 h) y tres meses después;
- el corredor tiene 18 años o más el día de la carrera.

El Core (`WizardSession`) no valida nada: confía en quien lo llama.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from core.domain.models import UserInput

RACE_WINDOW_MONTHS = 3
MINIMUM_AGE_YEARS = 18


class FormValidationError(ValueError):
    """Una o más reglas del formulario no se cumplen."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


def shift_months(day: date, months: int) -> date:
    """Suma (o resta) meses, ajustando el día al último del mes si hace falta."""

    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def race_date_window(now: datetime) -> tuple[date, date]:
    earliest = (now - timedelta(hours=1)).date()
    return earliest, shift_months(earliest, RACE_WINDOW_MONTHS)


def latest_allowed_birthdate(race_date: date) -> date:
    return shift_months(race_date, -12 * MINIMUM_AGE_YEARS)


def validate_user_input(user_input: UserInput, *, now: datetime | None = None) -> None:
    now = now or datetime.now()
    problems: list[str] = []

    if not user_input.last_name.strip():
        problems.append("last name is required")
    if not user_input.first_name.strip():
        problems.append("first name is required")
    if not user_input.email.strip():
        problems.append("email is required")

    earliest, latest = race_date_window(now)
    if not earliest <= user_input.race_date <= latest:
        problems.append(
            f"race date must be between {earliest.isoformat()} and {latest.isoformat()}"
        )

    limit = latest_allowed_birthdate(user_input.race_date)
    if user_input.birthdate > limit:
        problems.append(f"runner must be {MINIMUM_AGE_YEARS} or older on the race date")

    if problems:
        raise FormValidationError(problems)
