# laserheat/io/layers_csv.py
# -*- coding: utf-8 -*-
"""
Layer stack CSV ingest -> list[Layer] for MultiLayer.new.

CSV columns (header, case-sensitive):
  name, d_cm, z0_cm, mu_a_per_cm, e0_W_per_cm2 (optional)

Example rows:
  epidermis,0.01,0.0,20,1.0
  dermis,0.2,0.01,2,
  fat,1.0,0.21,0.5,

Only the first (shallowest) layer's e0 matters; deeper rows are overwritten by
the propagated irradiance when the stack is built. Numbers are kept as decimal
strings so they are parsed at the evaluation precision.
"""
from __future__ import annotations
import csv
from pathlib import Path

from laserheat.models.layer import Layer
from laserheat.utils.errors import ConfigError

__all__ = ["REQUIRED_COLUMNS", "load_layers_from_csv"]

REQUIRED_COLUMNS = ("d_cm", "z0_cm", "mu_a_per_cm")


def _cell(row: dict, key: str, default: str | None = None) -> str:
    raw = row.get(key)
    if raw is None or raw.strip() == "":
        if default is None:
            raise ConfigError(f"missing value for column '{key}'")
        return default
    return raw.strip()


def load_layers_from_csv(csv_path: Path) -> list[Layer]:
    layers: list[Layer] = []

    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ConfigError(f"{csv_path}: missing column(s) {', '.join(missing)}")
        for lineno, row in enumerate(reader, start=2):
            try:
                layers.append(
                    Layer(
                        d=_cell(row, "d_cm"),
                        z0=_cell(row, "z0_cm"),
                        mu_a=_cell(row, "mu_a_per_cm"),
                        e0=_cell(row, "e0_W_per_cm2", default="0"),
                        name=(row.get("name") or "").strip(),
                    )
                )
            except ValueError as exc:
                raise ConfigError(f"{csv_path}:{lineno}: {exc}") from exc

    if not layers:
        raise ConfigError("CSV contains no layers")

    return layers
