# laserheat/main.py
"""
laserheat main entrypoint.

Default subcommand: point
Usage examples:
    python -m laserheat
    python -m laserheat point --z 0.5 --t 1e-3 --beam flat-top --radius 0.1
    python -m laserheat point --integrate 0 1 --epsilon 1e-20 --precision 128
    python -m laserheat run case.yaml --out runs/case --set query.t=0.5
"""

from __future__ import annotations

from dataclasses import dataclass
import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .models.layer import Layer
from .models.thermal import ThermalProperties
from .physics.beams import Beam, FlatTopBeam, LargeBeam
from .solver.quadrature import QUADRATURE_METHODS, MpmathQuadrature
from .utils import logger
from .utils.constants import DEFAULT_PRECISION_BITS
from .utils.errors import LaserHeatError
from .utils.precision import to_decimal_str

__all__ = ["main"]


# ----------------------------- point subcommand -----------------------------


@dataclass(slots=True)
class _PointArgs:
    rho: str
    c: str
    k: str
    d: str
    z0: str
    mu_a: str
    e0: str
    beam: str
    radius: Optional[str]
    z: str
    r: str
    t: str
    precision: int
    integrate: Optional[Sequence[str]]
    epsilon: str
    method: str
    debug: bool


def _add_point_subparser(
    subparsers: argparse._SubParsersAction,
) -> argparse.ArgumentParser:
    p = subparsers.add_parser(
        "point", help="Single absorbing layer, rise at one (z, r, t)"
    )
    # strings on purpose: parsed by mpmath at the working precision
    p.add_argument("--rho", default="1", help="Density [g/cm^3]")
    p.add_argument("--c", default="1", help="Specific heat [J/(g K)]")
    p.add_argument("--k", default="1", help="Thermal conductivity [W/(cm K)]")
    p.add_argument("--d", default="1", help="Layer thickness [cm]")
    p.add_argument("--z0", default="0", help="Layer top depth [cm]")
    p.add_argument("--mu-a", dest="mu_a", default="1", help="Absorption coefficient [1/cm]")
    p.add_argument("--e0", default="1", help="Irradiance at the layer top [W/cm^2]")
    p.add_argument("--beam", choices=["large", "flat-top"], default="large", help="Beam profile")
    p.add_argument("--radius", default=None, help="Flat-top beam radius [cm]")
    p.add_argument("--z", default="1", help="Query depth [cm]")
    p.add_argument("--r", default="0", help="Query radial offset [cm]")
    p.add_argument("--t", default="1", help="Query time [s]")
    p.add_argument("--precision", type=int, default=DEFAULT_PRECISION_BITS, help="Working precision [bits]")
    p.add_argument(
        "--integrate", nargs=2, metavar=("T0", "T1"), default=None,
        help="Also integrate the rise over t in [T0, T1]"
    )
    p.add_argument("--epsilon", default="1e-15", help="Quadrature tolerance")
    p.add_argument("--method", choices=list(QUADRATURE_METHODS), default="tanh-sinh")
    p.add_argument("--debug", action="store_true", help="Verbose diagnostics")
    p.set_defaults(cmd="point")
    return p


def _point_args(ns: argparse.Namespace) -> _PointArgs:
    return _PointArgs(
        rho=ns.rho, c=ns.c, k=ns.k, d=ns.d, z0=ns.z0, mu_a=ns.mu_a, e0=ns.e0,
        beam=str(ns.beam), radius=ns.radius, z=ns.z, r=ns.r, t=ns.t,
        precision=int(ns.precision), integrate=ns.integrate,
        epsilon=ns.epsilon, method=str(ns.method), debug=bool(ns.debug),
    )


def _make_beam(args: _PointArgs) -> Beam:
    if args.beam == "flat-top":
        if args.radius is None:
            raise LaserHeatError("--radius is required with --beam flat-top")
        return FlatTopBeam(radius=args.radius)
    return LargeBeam()


def _run_point(args: _PointArgs) -> None:
    logger.set_debug(args.debug)
    thermal = ThermalProperties(rho=args.rho, c=args.c, k=args.k)
    layer = Layer(d=args.d, z0=args.z0, mu_a=args.mu_a, e0=args.e0)
    beam = _make_beam(args)

    rise = beam.evaluate_with(args.precision, thermal, layer, args.z, args.r, args.t)
    print(f"[ok] ΔT = {to_decimal_str(rise, args.precision)} K")

    if args.integrate is not None:
        quad = MpmathQuadrature(method=args.method)
        value, err = beam.temperature_rise(
            args.precision, quad, thermal, layer, args.z, args.r,
            args.epsilon, (args.integrate[0], args.integrate[1]),
        )
        print(f"[ok] ∫ΔT dt = {to_decimal_str(value, args.precision)} K·s "
              f"(err≈{to_decimal_str(err, 53)})")


# ------------------------------ run subcommand ------------------------------


def _add_run_subparser(
    subparsers: argparse._SubParsersAction,
) -> argparse.ArgumentParser:
    p = subparsers.add_parser("run", help="Evaluate a YAML case file")
    p.add_argument("config", help="Path to the YAML case")
    p.add_argument("--out", default=None, help="Output directory (default: runs/<stem>)")
    p.add_argument(
        "--set", dest="overrides", action="append", default=[],
        help="Override a config value, e.g. --set query.t=0.5 (repeatable)"
    )
    p.add_argument("--no-plot", action="store_true", help="Skip profile.png")
    p.add_argument("--debug", action="store_true", help="Verbose diagnostics")
    p.set_defaults(cmd="run")
    return p


def _run_case(ns: argparse.Namespace) -> None:
    from .workflows.run_point import run_from_config

    logger.set_debug(bool(ns.debug))
    run_from_config(
        Path(ns.config),
        Path(ns.out) if ns.out else None,
        ns.overrides,
        plot=not ns.no_plot,
    )


# --------------------------------- main() ------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="laserheat — Green's-function laser heating")
    sub = parser.add_subparsers(dest="cmd")

    point_parser = _add_point_subparser(sub)
    _add_run_subparser(sub)

    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        # If no subcommand given, default to 'point' with defaults
        if not argv:
            _run_point(_point_args(point_parser.parse_args([])))
            return 0

        ns = parser.parse_args(argv)
        if ns.cmd == "point":
            _run_point(_point_args(ns))
            return 0
        if ns.cmd == "run":
            _run_case(ns)
            return 0
    except (LaserHeatError, ValueError) as exc:
        logger.error(str(exc))
        return 1

    parser.error("Unknown command (try: point, run)")
    return 2


if __name__ == "__main__":
    sys.exit(main())
