"""Exportación JSON de los view models.

Por qué JSON:
- Permite inspeccionar/diffear lo que el Core entregó a la presentación.
- Sirve para pipelines (jq) sin depender del render de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import CatalogPageView, EntityDetailView


def export_view_json(*, view: CatalogPageView | EntityDetailView, output_path: Path) -> Path:
    """Exporta un view model a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = view.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
