# -*- coding: utf-8 -*-
"""
Sampled profiles and the command-line entry point.
"""
from pathlib import Path

import numpy as np

from laserheat.main import main
from laserheat.models.layer import Layer
from laserheat.models.multilayer import MultiLayer
from laserheat.models.thermal import ThermalProperties
from laserheat.physics.beams import FlatTopBeam, LargeBeam
from laserheat.workflows.profile import depth_profile, radial_profile, time_trace

THERMAL = ThermalProperties(rho=1, c=1, k=1)
STACK = MultiLayer.new([Layer(d=1, z0=0, mu_a=1, e0=1), Layer(d=1, z0=1, mu_a=2, e0=0)])


def test_depth_profile_matches_pointwise():
    z = np.linspace(0.0, 2.0, 9)
    dT = depth_profile(64, LargeBeam(), THERMAL, STACK, z, t=0.5)
    assert dT.dtype == np.float64 and dT.shape == (9,)
    assert dT[3] == float(STACK.evaluate_with(64, LargeBeam(), THERMAL, z[3], 0, 0.5))


def test_time_trace_and_radial_profile():
    t = np.array([0.0, 0.1, 0.5])
    trace = time_trace(64, LargeBeam(), THERMAL, STACK, t, z=0.0)
    assert trace[0] == float(STACK.evaluate_with(64, LargeBeam(), THERMAL, 0.0, 0, 0))
    assert (trace > 0).all()
    r = np.array([0.0, 0.5, 2.0])
    radial = radial_profile(64, FlatTopBeam(radius=1), THERMAL, STACK, r, z=0.5, t=0.0)
    assert radial[0] == radial[1] > 0 and radial[2] == 0.0


def test_cli_point_defaults(capsys):
    assert main([]) == 0
    assert "ΔT = 0.16110045756833" in capsys.readouterr().out


def test_cli_point_flat_top_with_integration(capsys):
    code = main(["point", "--beam", "flat-top", "--radius", "1", "--z", "1", "--t", "1",
                 "--integrate", "0", "0.5", "--epsilon", "1e-12"])
    out = capsys.readouterr().out
    assert code == 0
    assert "ΔT = 0.035635295060953" in out
    assert "∫ΔT dt" in out


def test_cli_reports_bad_input(capsys):
    assert main(["point", "--d", "-1"]) == 1
    assert main(["point", "--beam", "flat-top"]) == 1


def test_debug_lines_are_gated(capsys):
    from laserheat.utils import logger

    logger.set_debug(False)
    logger.debug("hidden")
    assert "hidden" not in capsys.readouterr().err
    logger.set_debug(True)
    try:
        logger.debug("shown")
        assert "DEBUG: shown" in capsys.readouterr().err
    finally:
        logger.set_debug(False)


def test_package_root_exports():
    import laserheat
    from laserheat.solver import time_integration
    from laserheat.special import marcum

    assert laserheat.MultiLayer is MultiLayer
    assert laserheat.FlatTopBeam is FlatTopBeam
    assert laserheat.temperature_rise is time_integration.temperature_rise
    assert laserheat.marcum_q is marcum.marcum_q
    root = Path(laserheat.__file__).parent
    shims = [p.parent.name for p in root.glob("*/__init__.py")]
    assert shims == ["utils"]
