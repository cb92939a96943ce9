"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para todos los pasos.
- `HttpxTransport` implementa `core.interfaces.transport.WizardTransport`,
  así que el orquestador se puede probar con un transporte falso.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.errors import DecodeFailure, TransportFailure
from core.domain.models import WizardRequest
from core.interfaces.transport import WizardTransport

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults de navegador.

    El cliente conserva las cookies de sesión del sitio entre pasos, por
    eso una ejecución completa usa un único cliente.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxTransport(WizardTransport):
    """Envía `WizardRequest` con un `httpx.AsyncClient` ya abierto.

    No gestiona el ciclo de vida del cliente: quien lo crea lo cierra.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, request: WizardRequest) -> str:
        content = request.body.encode("utf-8") if request.body is not None else None
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=content,
            )
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %r", request.method, request.url, exc)
            raise TransportFailure(f"{request.method} {request.url}: {exc}") from exc

        logger.debug("%s %s -> HTTP %s", request.method, request.url, response.status_code)
        # The status code is not checked: a rejected session shows up as
        # missing tokens in the returned page.
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeFailure(str(response.url)) from exc
