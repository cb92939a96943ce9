"""Orquestación del asistente PPS.

Recorre los siete pasos en orden estricto. Cada respuesta aporta el par
de tokens del paso siguiente; la última aporta el código PPS.

- Sin reintentos: cada POST modifica la sesión remota.
- La primera falla aborta la ejecución; no hay resultados parciales.
- Una sesión sirve para una sola ejecución.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from adapters.html_tokens import extract_final_code, extract_session_tokens
from adapters.http_client import HttpxTransport, build_async_client
from core.config import AppSettings
from core.domain.errors import WizardCancelled, WizardError
from core.domain.gender import Gender
from core.domain.models import SessionTokens, UserInput, WizardResult
from core.domain.steps import WizardStep
from core.interfaces.transport import WizardTransport
from core.services.request_builder import build_request

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    step_started: Callable[[WizardStep], None] | None = None
    step_completed: Callable[[WizardStep], None] | None = None


class WizardSession:
    """Una ejecución completa del asistente contra un transporte dado."""

    def __init__(
        self,
        transport: WizardTransport,
        *,
        settings: AppSettings | None = None,
        cancel_event: asyncio.Event | None = None,
        hooks: PipelineHooks | None = None,
    ) -> None:
        self._transport = transport
        self._settings = settings or AppSettings()
        self._cancel_event = cancel_event
        self._hooks = hooks or PipelineHooks()
        self._used = False

    async def run(
        self,
        race_date: date,
        gender: Gender | str,
        last_name: str,
        first_name: str,
        birthdate: date,
        email: str,
    ) -> str:
        """Completa el asistente y devuelve el código PPS."""

        user_input = UserInput(
            race_date=race_date,
            gender=Gender.parse(gender),
            last_name=last_name,
            first_name=first_name,
            birthdate=birthdate,
            email=email,
        )
        result = await self.generate(user_input)
        return result.code

    async def generate(self, user_input: UserInput) -> WizardResult:
        if self._used:
            raise RuntimeError("WizardSession instances are single-use")
        self._used = True

        tokens: SessionTokens | None = None
        for step in WizardStep.ordered():
            if step.is_terminal:
                code = await self._run_step(step, tokens, user_input, terminal=True)
                logger.info("PPS code generated for race on %s", user_input.race_date_value)
                return WizardResult(code=code, race_date=user_input.race_date)
            tokens = await self._run_step(step, tokens, user_input)

        raise AssertionError("wizard has no terminal step")  # pragma: no cover

    async def _run_step(
        self,
        step: WizardStep,
        tokens: SessionTokens | None,
        user_input: UserInput,
        *,
        terminal: bool = False,
    ) -> SessionTokens | str:
        if self._cancel_event is not None and self._cancel_event.is_set():
            logger.warning("Wizard cancelled before step %s", step.value)
            raise WizardCancelled(step=step)

        if self._hooks.step_started:
            self._hooks.step_started(step)
        logger.info("%s %s", step.method, step.value)

        try:
            request = build_request(step, tokens, user_input, settings=self._settings)
            html = await self._transport.send(request)
            if terminal:
                outcome = extract_final_code(html)
            else:
                outcome = extract_session_tokens(html)
                logger.debug(
                    "%s tokens: csrf=%s authenticity=%s",
                    step.value,
                    outcome.csrf_token,
                    outcome.authenticity_token,
                )
        except WizardError as exc:
            exc.with_step(step)
            logger.warning("Step %s failed (%s): %s", exc.step.value, exc.kind, exc.message)
            raise

        if self._hooks.step_completed:
            self._hooks.step_completed(step)
        return outcome


async def generate_pps_code(
    user_input: UserInput,
    *,
    settings: AppSettings | None = None,
    cancel_event: asyncio.Event | None = None,
    hooks: PipelineHooks | None = None,
) -> WizardResult:
    """Ejecuta una sesión completa con un cliente httpx propio."""

    settings = settings or AppSettings()
    async with build_async_client(settings) as client:
        session = WizardSession(
            HttpxTransport(client),
            settings=settings,
            cancel_event=cancel_event,
            hooks=hooks,
        )
        return await session.generate(user_input)
