"""Errores del asistente PPS.

Todas las fallas del pipeline heredan de `WizardError` y llevan:
- `kind`: identificador estable del tipo de falla (para la CLI/tests).
- `step`: el paso que falló, si se conoce.

Los extractores HTML no conocen el paso; el orquestador lo adjunta con
`with_step` antes de propagar.
"""

from __future__ import annotations

from enum import Enum

from core.domain.steps import WizardStep


class TokenKind(str, Enum):
    CSRF = "csrf"
    AUTHENTICITY = "authenticity"


class WizardError(Exception):
    """Base de la taxonomía de errores del asistente."""

    kind = "wizard_error"

    def __init__(self, message: str, *, step: WizardStep | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.step = step

    def with_step(self, step: WizardStep) -> "WizardError":
        """Bind the error to `step` unless it already names one."""

        if self.step is None:
            self.step = step
        return self

    def __str__(self) -> str:
        if self.step is None:
            return self.message
        return f"[{self.step.value}] {self.message}"


class InvalidTarget(WizardError):
    """La URL de un paso no se pudo formar (defecto de configuración)."""

    kind = "invalid_target"

    def __init__(self, url: str, *, step: WizardStep | None = None) -> None:
        super().__init__(f"The URL generated is invalid: {url}", step=step)
        self.url = url


class TransportFailure(WizardError):
    kind = "transport_failure"

    def __init__(self, detail: str, *, step: WizardStep | None = None) -> None:
        super().__init__(f"Request failed: {detail}", step=step)
        self.detail = detail


class DecodeFailure(WizardError):
    kind = "decode_failure"

    def __init__(self, url: str | None, *, step: WizardStep | None = None) -> None:
        super().__init__(f"Invalid HTML data received for: {url or '---'}", step=step)
        self.url = url


class TokenNotFound(WizardError):
    kind = "token_not_found"

    def __init__(self, token: TokenKind, *, step: WizardStep | None = None) -> None:
        label = "CSRF" if token is TokenKind.CSRF else "Authenticity"
        super().__init__(f"{label} Token not found", step=step)
        self.token = token


class CodeNotFound(WizardError):
    kind = "code_not_found"

    def __init__(self, *, step: WizardStep | None = None) -> None:
        super().__init__("PPS Code not found", step=step)


class HtmlParseError(WizardError):
    """El HTML recibido no se pudo parsear (distinto de "no encontrado")."""

    kind = "html_parse_error"

    def __init__(self, detail: str, *, step: WizardStep | None = None) -> None:
        super().__init__(f"Unparseable HTML: {detail}", step=step)
        self.detail = detail


class WizardCancelled(WizardError):
    kind = "cancelled"

    def __init__(self, *, step: WizardStep | None = None) -> None:
        super().__init__("Wizard cancelled before this step", step=step)
