"""Construcción de peticiones por paso.

Reglas del cuerpo (form-urlencoded):
- Siempre empieza por `_method=patch&authenticity_token=<token>`.
- Siempre termina con la clave `button` sin valor (el botón de envío).
- Los campos se emiten en el orden exacto del formulario original.
- Las casillas obligatorias se envían como `<clave>=0&<clave>=1`: el
  servidor se queda con el último valor, así que la casilla queda marcada.
  No se "limpia" este patrón.

Las claves van tal cual (corchetes incluidos); solo se codifican los valores.
Este módulo no hace I/O de red.
"""

from __future__ import annotations

from urllib.parse import quote_plus, urlsplit

import httpx

from core.config import AppSettings
from core.domain.errors import InvalidTarget
from core.domain.models import SessionTokens, UserInput, WizardRequest
from core.domain.steps import WizardStep

FormField = tuple[str, str | None]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
CSRF_HEADER = "X-CSRF-Token"
SUBMIT_FIELD = "button"


def _acknowledgement(prefix: str) -> list[FormField]:
    """Vídeo visto + casilla marcada, en el orden en que los envía el navegador."""

    return [
        (f"course[{prefix}_video]", "1"),
        (f"course[{prefix}_checkbox]", "0"),
        (f"course[{prefix}_checkbox]", "1"),
    ]


def step_fields(step: WizardStep, user_input: UserInput | None = None) -> list[FormField]:
    """Campos propios de `step`, sin el prefijo común ni el botón final."""

    if step is WizardStep.ENTRY:
        return []
    if step is WizardStep.RACE_DATE:
        return [("course[race_date]", _require(user_input, step).race_date_value)]
    if step is WizardStep.PERSONAL_INFOS:
        data = _require(user_input, step)
        return [
            # The radio group posts a bare key before the selected value.
            ("course[gender]", None),
            ("course[gender]", data.gender.value),
            ("course[last_name]", data.last_name),
            ("course[first_name]", data.first_name),
            ("course[birthdate(3i)]", data.birth_day),
            ("course[birthdate(2i)]", data.birth_month),
            ("course[birthdate(1i)]", data.birth_year),
            ("course[email]", data.email),
        ]
    if step is WizardStep.CARDIOVASCULAR_RISKS:
        return _acknowledgement("cardiovascular_risks")
    if step is WizardStep.RISK_FACTORS:
        return _acknowledgement("risk_factors")
    if step is WizardStep.PRECAUTIONS:
        return _acknowledgement("precautions")
    if step is WizardStep.FINALIZATION:
        return [
            ("course[finalization_checkbox]", "0"),
            ("course[finalization_checkbox]", "1"),
            ("course[ffa_newsletter]", "0"),
        ]
    raise ValueError(f"unknown step: {step!r}")


def _require(user_input: UserInput | None, step: WizardStep) -> UserInput:
    if user_input is None:
        raise ValueError(f"step {step.value} needs user input")
    return user_input


def encode_form(fields: list[FormField]) -> str:
    """Serializa pares en orden; un valor `None` produce la clave sola."""

    parts: list[str] = []
    for key, value in fields:
        if value is None:
            parts.append(key)
        else:
            parts.append(f"{key}={quote_plus(value, safe='@')}")
    return "&".join(parts)


def build_body(step: WizardStep, tokens: SessionTokens, user_input: UserInput | None = None) -> str:
    fields: list[FormField] = [
        ("_method", "patch"),
        ("authenticity_token", tokens.authenticity_token),
    ]
    fields.extend(step_fields(step, user_input))
    fields.append((SUBMIT_FIELD, None))
    return encode_form(fields)


def build_url(step: WizardStep, base_url: str) -> str:
    """Añade la ruta del paso a `base_url`; falla con `InvalidTarget`.

    La ruta siempre se concatena como sufijo, así que una base con ruta
    (`https://host/pps`) conserva su prefijo en todos los pasos.
    """

    raw = base_url.rstrip("/") + "/" + step.path
    try:
        urlsplit(raw)  # rejects unbalanced IPv6 brackets
        url = httpx.URL(raw)
    except (ValueError, httpx.InvalidURL) as exc:
        raise InvalidTarget(raw, step=step) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidTarget(raw, step=step)
    return str(url)


def build_request(
    step: WizardStep,
    tokens: SessionTokens | None,
    user_input: UserInput | None = None,
    *,
    settings: AppSettings | None = None,
) -> WizardRequest:
    """Describe la petición de `step` (método, URL, cabeceras, cuerpo)."""

    settings = settings or AppSettings()
    url = build_url(step, settings.base_url)
    headers = {"User-Agent": settings.user_agent}

    if step.method == "GET":
        return WizardRequest(step=step, method=step.method, url=url, headers=headers)

    if tokens is None:
        raise ValueError(f"step {step.value} needs the previous step's tokens")

    headers[CSRF_HEADER] = tokens.csrf_token
    headers["Content-Type"] = FORM_CONTENT_TYPE
    return WizardRequest(
        step=step,
        method=step.method,
        url=url,
        headers=headers,
        body=build_body(step, tokens, user_input),
    )
