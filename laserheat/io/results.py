# -*- coding: utf-8 -*-
"""
Results IO helpers.

Write:
  * metrics.json  (point values; mpf as full-precision decimal strings plus a
                   float twin under <key>_float)
  * fields.npz    (profile arrays for plotting)
  * profile.csv   (same arrays, tabular)

This keeps on-disk layout stable for post-processing and reports.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict

import mpmath
import numpy as np
import pandas as pd

from laserheat.utils.constants import DEFAULT_PRECISION_BITS
from laserheat.utils.precision import to_decimal_str

__all__ = ["jsonable", "write_metrics", "save_fields_npz", "write_profile_csv"]


def jsonable(value: Any, precision: int = DEFAULT_PRECISION_BITS) -> Any:
    if isinstance(value, mpmath.mpf):
        return to_decimal_str(value, precision)
    if isinstance(value, dict):
        return {str(k): jsonable(v, precision) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(v, precision) for v in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value


def write_metrics(run_dir: Path, metrics: Dict[str, Any], precision: int = DEFAULT_PRECISION_BITS) -> Path:
    """mpf values go out as decimal strings; top-level ones also as ``<key>_float``."""
    run_dir.mkdir(parents=True, exist_ok=True)
    out = run_dir / "metrics.json"
    payload = jsonable(metrics, precision)
    for key, value in metrics.items():
        if isinstance(value, mpmath.mpf):
            payload[f"{key}_float"] = float(value)
    with open(out, "w") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return out


def save_fields_npz(run_dir: Path, **arrays) -> Path:
    """
    Save arrays for viz (e.g., z, rise, layer_edges).
    """
    run_dir.mkdir(parents=True, exist_ok=True)
    out = run_dir / "fields.npz"
    np.savez_compressed(out, **arrays)
    return out


def write_profile_csv(run_dir: Path, **columns) -> Path:
    run_dir.mkdir(parents=True, exist_ok=True)
    out = run_dir / "profile.csv"
    pd.DataFrame({k: np.asarray(v) for k, v in columns.items()}).to_csv(out, index=False)
    return out
