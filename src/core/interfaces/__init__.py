"""Interfaces/abstracciones del Core.

- `transport.WizardTransport`: contrato que implementa `adapters.http_client`.
- El orquestador depende del contrato, no de httpx.
"""
