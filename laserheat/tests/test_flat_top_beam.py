# -*- coding: utf-8 -*-
"""
Flat-top beam = planar solution x radial truncation factor.
"""
import pytest
from mpmath import mp

from laserheat.models.layer import Layer
from laserheat.models.thermal import ThermalProperties
from laserheat.physics.beams import FlatTopBeam, LargeBeam, beam_from_spec
from laserheat.special.marcum import marcum_q
from laserheat.utils.precision import workprec

THERMAL = ThermalProperties(rho=1, c=1, k=1)
LAYER = Layer(d=1, z0=0, mu_a=1, e0=1)
BEAM = FlatTopBeam(radius=1)

# 0.16110045756833416583 * (1 - e^{-1/4})
REF_Z1_T1_AXIS = "0.035635295060953884529"


def test_inside_radius_at_t0_is_planar_value():
    assert BEAM.evaluate_with(64, THERMAL, LAYER, 0, 0, 0) == 0.5
    assert BEAM.evaluate_with(64, THERMAL, LAYER, 1, 0, 0) == \
        LargeBeam().evaluate_with(64, THERMAL, LAYER, 1, 0, 0)


def test_rim_counts_as_inside_at_t0():
    assert BEAM.evaluate_with(64, THERMAL, LAYER, 0, 1, 0) == 0.5


def test_outside_radius_at_t0_is_exactly_zero():
    assert BEAM.evaluate_with(64, THERMAL, LAYER, 0, "1.5", 0) == 0


@pytest.mark.parametrize("precision", [64, 256])
def test_on_axis_reference(precision):
    out = BEAM.evaluate_with(precision, THERMAL, LAYER, 1, 0, 1)
    with workprec(precision):
        assert abs(out - mp.mpf(REF_Z1_T1_AXIS)) < mp.mpf("1e-16")


def test_off_axis_uses_marcum_factor():
    # 2 alpha t = 2 -> a = 0.25, b = 0.5
    out = BEAM.evaluate_with(128, THERMAL, LAYER, "0.5", "0.5", 1)
    planar = LargeBeam().evaluate_with(128, THERMAL, LAYER, "0.5", 0, 1)
    with workprec(128):
        expected = planar * (1 - marcum_q(1, "0.25", "0.5", 128))
        assert abs(out - expected) < mp.mpf("1e-35")
        assert 0 < out < planar


def test_never_exceeds_large_beam():
    for z, r, t in [("0.2", 0, "0.01"), ("0.8", "0.3", "0.5"), (1, "2", "0.25")]:
        ft = BEAM.evaluate_with(64, THERMAL, LAYER, z, r, t)
        lb = LargeBeam().evaluate_with(64, THERMAL, LAYER, z, r, t)
        assert 0 <= ft <= lb


def test_wider_beam_heats_more_on_axis():
    narrow = FlatTopBeam(radius="0.5").evaluate_with(64, THERMAL, LAYER, "0.5", 0, "0.5")
    wide = FlatTopBeam(radius=2).evaluate_with(64, THERMAL, LAYER, "0.5", 0, "0.5")
    assert narrow < wide


@pytest.mark.parametrize("radius", [0, -1, "nan"])
def test_invalid_radius(radius):
    with pytest.raises(ValueError):
        FlatTopBeam(radius=radius)


def test_beam_from_spec():
    assert beam_from_spec({"kind": "large"}) == LargeBeam()
    assert beam_from_spec({"kind": "flat-top", "radius": 0.1}) == FlatTopBeam(radius=0.1)
    with pytest.raises(ValueError):
        beam_from_spec({"kind": "flat_top"})
    with pytest.raises(ValueError):
        beam_from_spec({"kind": "gaussian"})


@pytest.mark.parametrize("t", ["1e-2", "1e-3", "1e-4"])
def test_off_axis_small_time(t):
    # 2 alpha t << 1 drives ab = r radius / (2 alpha t)^2 far past the series range
    inside = BEAM.evaluate_with(64, THERMAL, LAYER, "0.5", "0.5", t)
    outside = BEAM.evaluate_with(64, THERMAL, LAYER, "0.5", "1.5", t)
    planar = LargeBeam().evaluate_with(64, THERMAL, LAYER, "0.5", 0, t)
    with workprec(64):
        assert abs(inside - planar) < mp.mpf("1e-15")
        assert 0 <= outside < mp.mpf("1e-15")


def test_off_axis_transition_region():
    # 2 alpha t = 0.1 -> a = 5, b = 10: ab on the large-argument side, Q not saturated
    out = BEAM.evaluate_with(64, THERMAL, LAYER, "0.5", "0.5", "0.05")
    planar = LargeBeam().evaluate_with(64, THERMAL, LAYER, "0.5", 0, "0.05")
    with workprec(64):
        q = marcum_q(1, 5, 10, 64)
        assert 0 < q < mp.mpf("1e-4")
        assert abs(out - planar * (1 - q)) < mp.mpf("1e-15")
