# -*- coding: utf-8 -*-
"""
YAML case loading, overrides, and the run_from_config workflow.
"""
import json
import textwrap

import numpy as np
import pytest
from mpmath import mp

from laserheat.io.config import (
    apply_overrides, build_beam, build_integration, build_layers, build_multilayer,
    build_profile, build_query, build_thermal, load_config, precision_of,
)
from laserheat.physics.beams import FlatTopBeam, LargeBeam
from laserheat.utils.errors import ConfigError
from laserheat.utils.precision import workprec
from laserheat.workflows.run_point import run_from_config

CASE = """
precision_bits: 96
thermal: { rho: 1, c: 1, k: 1 }
beam: { kind: flat_top, radius: 1 }
layers:
  - { name: top, d: 1, z0: 0, mu_a: 1, e0: 1 }
  - { name: bottom, d: 1, z0: 1, mu_a: "0.5" }
query: { z: 0, r: 0, t: 0 }
integration: { epsilon: "1e-12", t_start: 0, t_end: "0.5" }
profile: { z_start: 0.0, z_stop: 2.0, n: 11 }
"""


def _write(tmp_path, text, name="case.yaml"):
    path = tmp_path / name
    path.write_text(textwrap.dedent(text))
    return path


def test_builders(tmp_path):
    cfg = load_config(_write(tmp_path, CASE))
    assert precision_of(cfg) == 96
    assert build_beam(cfg) == FlatTopBeam(radius=1)
    assert [layer.name for layer in build_layers(cfg)] == ["top", "bottom"]
    stack = build_multilayer(cfg)
    with workprec(96):
        assert stack[1].e0 == mp.exp(-1)
    q = build_query(cfg)
    assert (q.z, q.r, q.t) == (0, 0, 0)
    it = build_integration(cfg)
    assert it.bounds == (0, "0.5")
    assert build_profile(cfg).n == 11
    thermal = build_thermal(cfg)
    # surface at t = 0: bottom layer contributes mu_a e0 / 2 exp(-mu_a (0 - 1)) = 0.25 e^{-1} e^{0.5}
    got = stack.evaluate_with(96, build_beam(cfg), thermal, q.z, q.r, q.t)
    with workprec(96):
        want = mp.mpf("0.5") + mp.mpf("0.25") * mp.exp(-1) * mp.exp(mp.mpf("0.5"))
        assert abs(got - want) < mp.mpf("1e-27")


def test_missing_keys(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "thermal: {rho: 1, c: 1, k: 1}\nlayers: []\n"))
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "- just\n- a list\n"))
    cfg = load_config(_write(tmp_path, "thermal: {rho: 1, c: 1}\nbeam: {kind: large}\nlayers: []\n"))
    with pytest.raises(ConfigError):
        build_thermal(cfg)
    with pytest.raises(ConfigError):
        build_layers(cfg)


def test_bad_values_become_config_errors(tmp_path):
    cfg = load_config(_write(tmp_path, """
    thermal: {rho: 1, c: 1, k: 1}
    beam: {kind: flat_top, radius: -2}
    layers:
      - {d: 0, z0: 0, mu_a: 1, e0: 1}
    """))
    with pytest.raises(ConfigError):
        build_beam(cfg)
    with pytest.raises(ConfigError):
        build_layers(cfg)


@pytest.mark.parametrize("builder,section", [
    (build_profile, "profile: {z_start: 0.0}"),
    (build_profile, "profile: {z_start: 0.0, z_stop: abc}"),
    (build_profile, "profile: [0, 1]"),
    (build_query, "query: [0, 0, 0]"),
    (build_query, "query: 0.5"),
    (build_integration, "integration: 1.0"),
])
def test_malformed_optional_sections(tmp_path, builder, section):
    cfg = load_config(_write(tmp_path, f"thermal: {{rho: 1, c: 1, k: 1}}\nbeam: {{kind: large}}\nlayers: []\n{section}\n"))
    with pytest.raises(ConfigError):
        builder(cfg)


def test_overlapping_layers(tmp_path):
    cfg = load_config(_write(tmp_path, """
    thermal: {rho: 1, c: 1, k: 1}
    beam: {kind: large}
    layers:
      - {d: 1, z0: 0, mu_a: 1, e0: 1}
      - {d: 1, z0: 0.5, mu_a: 1}
    """))
    with pytest.raises(ConfigError):
        build_multilayer(cfg)


def test_overrides(tmp_path):
    cfg = load_config(_write(tmp_path, CASE))
    apply_overrides(cfg, ["beam.kind=large", "query.t=0.25", "layers.1.mu_a=2", "precision_bits=128"])
    assert build_beam(cfg) == LargeBeam()
    assert build_query(cfg).t == 0.25
    assert build_layers(cfg)[1].mu_a == 2
    assert precision_of(cfg) == 128
    with pytest.raises(ConfigError):
        apply_overrides(cfg, ["no_equals_sign"])


def test_layers_from_csv(tmp_path):
    (tmp_path / "stack.csv").write_text(
        "name,d_cm,z0_cm,mu_a_per_cm,e0_W_per_cm2\n"
        "skin,0.1,0,10,2\n"
        "fat,1,0.1,0.5,\n"
    )
    cfg = load_config(_write(tmp_path, """
    thermal: {rho: 1, c: 1, k: 1}
    beam: {kind: large}
    layers_csv: stack.csv
    """))
    stack = build_multilayer(cfg)
    assert [layer.name for layer in stack] == ["skin", "fat"]
    with workprec(64):
        assert abs(stack[1].e0 - 2 * mp.exp(-1)) < mp.mpf("1e-18")


def test_run_from_config(tmp_path):
    out = tmp_path / "out"
    metrics = run_from_config(_write(tmp_path, CASE), out, plot=False)
    assert metrics["n_layers"] == 2
    assert metrics["integrated_rise_K_s"] > 0
    assert metrics["integration_error"] < mp.mpf("1e-9")

    saved = json.loads((out / "metrics.json").read_text())
    assert saved["precision_bits"] == 96
    assert saved["rise_K"].startswith("0.65")
    assert isinstance(saved["rise_K_float"], float)
    assert abs(saved["rise_K_float"] - float(metrics["rise_K"])) < 1e-15
    assert saved["integrated_rise_K_s_float"] > 0
    assert "precision_bits_float" not in saved

    fields = np.load(out / "fields.npz")
    assert fields["z"].shape == fields["rise"].shape == (11,)
    assert list(fields["layer_edges"]) == [0.0, 1.0, 2.0]
    assert (out / "profile.csv").read_text().startswith("z_cm,rise_K")
