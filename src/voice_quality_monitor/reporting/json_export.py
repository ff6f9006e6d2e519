"""Write monitor export bundles to disk for offline analysis."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def write_export(data: dict[str, Any], output_path: str | Path = "session_export.json") -> Path:
    """Dump an export bundle (``get_export_data()``) as indented JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, default=str)
    logger.info("Wrote session export to %s", output_path)
    return output_path


def load_export(path: str | Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)
