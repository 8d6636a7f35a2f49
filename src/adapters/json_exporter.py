"""JSON export of validation results.

Why JSON:
- Interoperability with scripts and CI jobs that consume batch outcomes.
- Keeps an auditable trace of what was checked without a terminal.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from core.domain.models import ValidationResult


def export_results_json(*, results: Mapping[str, ValidationResult], output_path: Path) -> Path:
    """Write `{key: result}` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {key: result.model_dump(mode="json") for key, result in results.items()}
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
