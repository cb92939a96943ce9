"""Pasos del asistente PPS.

Cada paso es un valor de una enumeración cerrada; método HTTP y ruta se
consultan en una tabla estática en lugar de estar repartidos por el
orquestador.
"""

from __future__ import annotations

from enum import Enum


class WizardStep(str, Enum):
    """One page of the wizard, in execution order."""

    ENTRY = "entry"
    RACE_DATE = "race_date"
    PERSONAL_INFOS = "personal_infos"
    CARDIOVASCULAR_RISKS = "cardiovascular_risks"
    RISK_FACTORS = "risk_factors"
    PRECAUTIONS = "precautions"
    FINALIZATION = "finalization"

    @classmethod
    def ordered(cls) -> tuple["WizardStep", ...]:
        return tuple(cls)

    @property
    def method(self) -> str:
        return _ROUTES[self][0]

    @property
    def path(self) -> str:
        """Path relative to the configured base URL."""

        return _ROUTES[self][1]

    @property
    def is_terminal(self) -> bool:
        return self is WizardStep.FINALIZATION

    def label(self) -> str:
        return self.value.replace("_", " ")


_ROUTES: dict[WizardStep, tuple[str, str]] = {
    WizardStep.ENTRY: ("GET", ""),
    WizardStep.RACE_DATE: ("POST", "courses/wizards/race_date"),
    WizardStep.PERSONAL_INFOS: ("POST", "courses/wizards/personal_infos"),
    WizardStep.CARDIOVASCULAR_RISKS: ("POST", "courses/wizards/cardiovascular_risks"),
    WizardStep.RISK_FACTORS: ("POST", "courses/wizards/risk_factors"),
    WizardStep.PRECAUTIONS: ("POST", "courses/wizards/precautions"),
    WizardStep.FINALIZATION: ("POST", "courses/wizards/finalization"),
}
