# laserheat/io/config.py
# -*- coding: utf-8 -*-
"""
YAML -> ThermalProperties, layers, Beam and evaluation settings.

Schema (minimal, example):

precision_bits: 128
thermal: { rho: 1.0, c: 1.0, k: 1.0 }
beam:    { kind: flat_top, radius: 0.5 }      # or { kind: large }
layers:
  - { name: top,    d: 1.0, z0: 0.0, mu_a: 1.0, e0: 1.0 }
  - { name: bottom, d: 1.0, z0: 1.0, mu_a: 0.5 }
# layers_csv: stack.csv                       # alternative to 'layers'
query:       { z: 0.5, r: 0.0, t: 1.0 }
integration: { epsilon: "1e-20", t_start: 0.0, t_end: 1.0, method: tanh-sinh, max_degree: 8 }
profile:     { z_start: 0.0, z_stop: 2.0, n: 41 }

Numbers may be written as strings ("0.1", "1e-20") to be parsed exactly at
the working precision.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from laserheat.io.layers_csv import load_layers_from_csv
from laserheat.models.layer import Layer
from laserheat.models.multilayer import MultiLayer
from laserheat.models.thermal import ThermalProperties
from laserheat.physics.beams import Beam, beam_from_spec
from laserheat.solver.quadrature import MpmathQuadrature
from laserheat.utils.constants import DEFAULT_PRECISION_BITS
from laserheat.utils.errors import ConfigError
from laserheat.utils.precision import RealLike, check_precision

__all__ = [
    "RunConfig", "Query", "IntegrationSpec", "ProfileSpec",
    "load_config", "precision_of", "build_thermal", "build_layers",
    "build_multilayer", "build_beam", "build_query", "build_integration",
    "build_profile", "apply_overrides",
]

@dataclass
class RunConfig:
    raw: dict
    path: Path


@dataclass(frozen=True, slots=True)
class Query:
    z: RealLike
    r: RealLike = 0
    t: RealLike = 0


@dataclass(frozen=True, slots=True)
class IntegrationSpec:
    epsilon: RealLike
    t_start: RealLike
    t_end: RealLike
    method: str = "tanh-sinh"
    min_degree: int = 2
    max_degree: int = 8

    @property
    def bounds(self) -> tuple[RealLike, RealLike]:
        return (self.t_start, self.t_end)

    def quadrature(self) -> MpmathQuadrature:
        return MpmathQuadrature(method=self.method, min_degree=self.min_degree,
                                max_degree=self.max_degree)


@dataclass(frozen=True, slots=True)
class ProfileSpec:
    z_start: float
    z_stop: float
    n: int = 41


def load_config(path: Path) -> RunConfig:
    data = yaml.safe_load(Path(path).read_text())
    if not isinstance(data, dict):
        raise ConfigError("Top-level YAML must be a mapping")
    _validate_minimum(data)
    return RunConfig(raw=data, path=Path(path))


def precision_of(cfg: RunConfig) -> int:
    try:
        return check_precision(cfg.raw.get("precision_bits", DEFAULT_PRECISION_BITS))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"precision_bits: {exc}") from exc


def build_thermal(cfg: RunConfig) -> ThermalProperties:
    th = _section(cfg, "thermal")
    try:
        return ThermalProperties(rho=th["rho"], c=th["c"], k=th["k"])
    except KeyError as exc:
        raise ConfigError(f"thermal.{exc.args[0]} is missing") from exc
    except ValueError as exc:
        raise ConfigError(f"thermal: {exc}") from exc


def build_layers(cfg: RunConfig) -> list[Layer]:
    if "layers_csv" in cfg.raw:
        csv_path = Path(cfg.raw["layers_csv"])
        if not csv_path.is_absolute():
            csv_path = cfg.path.parent / csv_path
        return load_layers_from_csv(csv_path)

    rows = cfg.raw.get("layers") or []
    if not rows:
        raise ConfigError("layers is empty")

    layers: list[Layer] = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise ConfigError(f"layers[{i}] must be a mapping")
        try:
            layers.append(
                Layer(
                    d=row["d"],
                    z0=row["z0"],
                    mu_a=row["mu_a"],
                    e0=row.get("e0", 0),
                    name=str(row.get("name", "")),
                )
            )
        except KeyError as exc:
            raise ConfigError(f"layers[{i}].{exc.args[0]} is missing") from exc
        except ValueError as exc:
            raise ConfigError(f"layers[{i}]: {exc}") from exc
    return layers


def build_multilayer(cfg: RunConfig) -> MultiLayer:
    stack = MultiLayer.new(build_layers(cfg), precision=precision_of(cfg))
    if stack is None:
        raise ConfigError("layers overlap; check z0/d of adjacent layers")
    return stack


def build_beam(cfg: RunConfig) -> Beam:
    try:
        return beam_from_spec(_section(cfg, "beam"))
    except ValueError as exc:
        raise ConfigError(f"beam: {exc}") from exc


def build_query(cfg: RunConfig) -> Optional[Query]:
    if cfg.raw.get("query") is None:
        return None
    q = _section(cfg, "query")
    if "z" not in q:
        raise ConfigError("query.z is missing")
    return Query(z=q["z"], r=q.get("r", 0), t=q.get("t", 0))


def build_integration(cfg: RunConfig) -> Optional[IntegrationSpec]:
    if cfg.raw.get("integration") is None:
        return None
    it = _section(cfg, "integration")
    try:
        return IntegrationSpec(
            epsilon=it.get("epsilon", "1e-15"),
            t_start=it.get("t_start", 0),
            t_end=it["t_end"],
            method=str(it.get("method", "tanh-sinh")),
            min_degree=int(it.get("min_degree", 2)),
            max_degree=int(it.get("max_degree", 8)),
        )
    except KeyError as exc:
        raise ConfigError(f"integration.{exc.args[0]} is missing") from exc


def build_profile(cfg: RunConfig) -> Optional[ProfileSpec]:
    if cfg.raw.get("profile") is None:
        return None
    p = _section(cfg, "profile")
    try:
        n = int(p.get("n", 41))
        spec = ProfileSpec(z_start=float(p["z_start"]), z_stop=float(p["z_stop"]), n=n)
    except KeyError as exc:
        raise ConfigError(f"profile.{exc.args[0]} is missing") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"profile: {exc}") from exc
    if n < 2:
        raise ConfigError("profile.n must be >= 2")
    return spec


def apply_overrides(cfg: RunConfig, overrides: Sequence[str]) -> RunConfig:
    """
    In-place dotted overrides, e.g. ["query.t=0.5", "beam.radius=0.2"].
    Values are parsed as YAML scalars.
    """
    for item in overrides:
        if "=" not in item:
            raise ConfigError(f"override must look like key.path=value, got {item!r}")
        key, value = item.split("=", 1)
        node: Any = cfg.raw
        parts = key.strip().split(".")
        for part in parts[:-1]:
            if isinstance(node, list):
                node = node[int(part)]
            else:
                node = node.setdefault(part, {})
        leaf = parts[-1]
        parsed = yaml.safe_load(value)
        if isinstance(node, list):
            node[int(leaf)] = parsed
        else:
            node[leaf] = parsed
    return cfg


def _section(cfg: RunConfig, key: str) -> dict:
    sec = cfg.raw.get(key)
    if not isinstance(sec, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return sec


def _validate_minimum(cfg: dict) -> None:
    for key in ("thermal", "beam"):
        if key not in cfg:
            raise ConfigError(f"Missing top-level key: {key}")
    if "layers" not in cfg and "layers_csv" not in cfg:
        raise ConfigError("Missing top-level key: layers (or layers_csv)")
