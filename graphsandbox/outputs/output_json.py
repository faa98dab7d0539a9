"""JSON output — deterministic result.json and run-metadata.json."""

from __future__ import annotations

import dataclasses
import json
import math
from enum import Enum
from pathlib import Path
from typing import Any


def result_to_dict(algorithm: str, result: Any) -> dict[str, Any]:
    data = _jsonable(dataclasses.asdict(result))
    data["algorithm"] = algorithm
    # properties are not dataclass fields
    for extra in ("exists", "reachable"):
        if hasattr(result, extra):
            data[extra] = getattr(result, extra)
    return data


def render_json(algorithm: str, result: Any, out_path: Path) -> Path:
    """Write byte-deterministic result.json and return the written path."""
    out_dir = Path(str(out_path))
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / "result.json"
    out_file.write_text(
        json.dumps(result_to_dict(algorithm, result), sort_keys=True, indent=2) + "\n",
        encoding="utf-8",
    )
    return out_file


def write_run_metadata(meta: dict[str, str], out_path: Path) -> Path:
    """Write run-metadata.json to *out_path* and return the written path."""
    out_dir = Path(str(out_path))
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / "run-metadata.json"
    out_file.write_text(json.dumps(meta, sort_keys=True, indent=2) + "\n", encoding="utf-8")
    return out_file


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_jsonable(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and not math.isfinite(value):
        # unreachable distances
        return None
    return value
