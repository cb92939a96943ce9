"""Contrato de transporte HTTP del asistente.

Por qué Protocol:
- El orquestador solo necesita "enviar una petición y recibir HTML".
- Permite sustituir httpx por un transporte falso en tests sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import WizardRequest


@runtime_checkable
class WizardTransport(Protocol):
    """Contrato mínimo de transporte.

    Reglas:
    - `send` es asíncrono (I/O de red).
    - Devuelve el cuerpo de la respuesta decodificado como texto.
    - Falla con `TransportFailure` (red) o `DecodeFailure` (cuerpo no textual).
    """

    async def send(self, request: WizardRequest) -> str:
        ...
