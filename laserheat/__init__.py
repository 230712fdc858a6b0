# laserheat/__init__.py
"""
Temperature rise in layered absorbing media from closed-form Green's
functions of the heat equation, evaluated at arbitrary precision (mpmath).
"""
from __future__ import annotations

from .models.layer import Layer
from .models.multilayer import MultiLayer
from .models.thermal import ThermalProperties
from .physics.beams import Beam, FlatTopBeam, LargeBeam
from .solver.quadrature import MpmathQuadrature, Quadrature
from .solver.time_integration import temperature_rise
from .special.marcum import marcum_q

__version__ = "0.1.0"

__all__ = [
    "ThermalProperties", "Layer", "MultiLayer",
    "Beam", "LargeBeam", "FlatTopBeam",
    "Quadrature", "MpmathQuadrature", "temperature_rise",
    "marcum_q",
]
