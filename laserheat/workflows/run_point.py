# -*- coding: utf-8 -*-
"""
Single-run workflow wiring config -> stack/beam -> evaluation -> results.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt

from laserheat.io.config import (
    apply_overrides, build_beam, build_integration, build_multilayer,
    build_profile, build_query, build_thermal, load_config, precision_of,
)
from laserheat.io.results import save_fields_npz, write_metrics, write_profile_csv
from laserheat.postprocess.visualization import plot_depth_profile
from laserheat.utils import logger
from laserheat.utils.precision import to_decimal_str
from laserheat.workflows.profile import depth_profile

__all__ = ["run_from_config"]


def run_from_config(
    cfg_path: Path,
    out_dir: Optional[Path] = None,
    overrides: Sequence[str] = (),
    *,
    plot: bool = True,
) -> Dict[str, Any]:
    cfg = load_config(Path(cfg_path))
    if overrides:
        apply_overrides(cfg, overrides)
    out_dir = Path(out_dir) if out_dir is not None else Path("runs") / Path(cfg_path).stem

    precision = precision_of(cfg)
    thermal = build_thermal(cfg)
    stack = build_multilayer(cfg)
    beam = build_beam(cfg)
    query = build_query(cfg)
    integration = build_integration(cfg)
    profile = build_profile(cfg)

    logger.info(f"[run] {len(stack)} layer(s), beam={beam!r}, precision={precision} bits")
    metrics: Dict[str, Any] = {"precision_bits": precision, "n_layers": len(stack)}

    if query is not None:
        rise = stack.evaluate_with(precision, beam, thermal, query.z, query.r, query.t)
        metrics["query"] = {"z": query.z, "r": query.r, "t": query.t}
        metrics["rise_K"] = rise
        logger.info(f"[run] ΔT(z={query.z}, r={query.r}, t={query.t}) = {to_decimal_str(rise, precision)} K")

        if integration is not None:
            value, err = stack.temperature_rise(
                precision, integration.quadrature(), beam, thermal,
                query.z, query.r, integration.epsilon, integration.bounds,
            )
            metrics["integrated_rise_K_s"] = value
            metrics["integration_error"] = err
            metrics["integration_bounds"] = [integration.t_start, integration.t_end]
            logger.info(f"[run] ∫ΔT dt = {to_decimal_str(value, precision)} K·s "
                        f"(err≈{to_decimal_str(err, 53)})")

    if profile is not None:
        r = query.r if query is not None else 0
        t = query.t if query is not None else 0
        z = np.linspace(profile.z_start, profile.z_stop, profile.n)
        dT = depth_profile(precision, beam, thermal, stack, z, r=r, t=t)
        edges = np.asarray([float(e) for e in stack.interfaces(precision)], dtype=np.float64)
        save_fields_npz(out_dir, z=z, rise=dT, layer_edges=edges)
        write_profile_csv(out_dir, z_cm=z, rise_K=dT)
        metrics["profile_max_K"] = float(dT.max())
        if plot:
            fig, _ax = plot_depth_profile(z, dT, layer_edges_cm=edges)
            fig.savefig(out_dir / "profile.png", dpi=180)
            plt.close(fig)
        logger.info(f"[run] saved profile for viz at {out_dir}")

    path = write_metrics(out_dir, metrics, precision)
    logger.info(f"[run] wrote metrics to: {path}")
    return metrics
