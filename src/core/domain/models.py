"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los valores que viajan entre pasos son inmutables (`frozen=True`).

Nota:
- Estos modelos describen *qué* se envía y recibe, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.gender import Gender
from core.domain.steps import WizardStep


class UserInput(BaseModel):
    """Datos del corredor, suministrados una única vez al inicio del pipeline.

    El Core confía en que el llamador ya validó estos valores
    (ver `core.validation`).
    """

    model_config = ConfigDict(frozen=True)

    race_date: date = Field(..., description="Fecha de la próxima carrera.")
    gender: Gender = Field(..., description="Sexo declarado en el formulario.")
    last_name: str = Field(..., description="Apellido.")
    first_name: str = Field(..., description="Nombre.")
    birthdate: date = Field(..., description="Fecha de nacimiento.")
    email: str = Field(..., description="Email al que el sitio asocia el PPS.")

    @property
    def race_date_value(self) -> str:
        """`YYYY-MM-DD`, as the race-date field expects."""

        return self.race_date.strftime("%Y-%m-%d")

    @property
    def birth_day(self) -> str:
        return f"{self.birthdate.day:02d}"

    @property
    def birth_month(self) -> str:
        return f"{self.birthdate.month:02d}"

    @property
    def birth_year(self) -> str:
        return f"{self.birthdate.year:04d}"


class SessionTokens(BaseModel):
    """Par de tokens anti-CSRF emitido por cada paso no terminal."""

    model_config = ConfigDict(frozen=True)

    csrf_token: str = Field(
        ...,
        min_length=1,
        description="Valor de `<meta name=csrf-token>`; viaja en la cabecera X-CSRF-Token.",
    )
    authenticity_token: str = Field(
        ...,
        min_length=1,
        description="Valor de `<input name=authenticity_token>`; viaja en el cuerpo del POST.",
    )


class WizardRequest(BaseModel):
    """Descripción completa de una petición saliente, lista para el transporte."""

    model_config = ConfigDict(frozen=True)

    step: WizardStep
    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None


class WizardResult(BaseModel):
    """Resultado final de una ejecución completa del asistente."""

    code: str = Field(..., min_length=1, description="Código PPS generado.")
    race_date: date = Field(..., description="Fecha de carrera para la que vale el código.")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Momento de generación (UTC).",
    )
