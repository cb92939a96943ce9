"""Exportación JSON del resultado.

Por qué JSON:
- Permite encadenar la CLI con otras herramientas (scripts, calendarios).
- No guarda estado de sesión: solo el código y su fecha de carrera.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import WizardResult


def result_to_json(result: WizardResult) -> str:
    payload = result.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_result_json(*, result: WizardResult, output_path: Path) -> Path:
    """Exporta `WizardResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result_to_json(result), encoding="utf-8")
    return output_path
