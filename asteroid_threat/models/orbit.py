# asteroid_threat/models/orbit.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from asteroid_threat.config.settings import ORBIT_DEFAULT_PERIOD, ORBIT_DEFAULT_SEMI_MAJOR_AXIS
from asteroid_threat.errors import InvalidOrbitError

TWO_PI = 2.0 * math.pi

PROGRADE = "prograde"
RETROGRADE = "retrograde"

PositionSink = Callable[[np.ndarray], None]


def wrap_angle(angle: float) -> float:
    """Reduce an angle into [0, 2*pi). Non-finite angles come back as NaN."""
    if not math.isfinite(angle):
        return float("nan")
    out = math.fmod(angle, TWO_PI)
    if out < 0.0:
        out += TWO_PI
    # fmod of a tiny negative plus 2*pi can round up to exactly 2*pi
    if out >= TWO_PI:
        out = 0.0
    return out


@dataclass(frozen=True)
class OrbitalElements:
    semi_major_axis: float = ORBIT_DEFAULT_SEMI_MAJOR_AXIS
    eccentricity: float = 0.0
    inclination: float = 0.0                   # rad
    argument_of_periapsis: float = 0.0         # rad
    longitude_of_ascending_node: float = 0.0   # rad
    true_anomaly: float = 0.0                  # rad
    orbital_period: float = ORBIT_DEFAULT_PERIOD
    direction: str = PROGRADE

    def validate(self) -> None:
        if not self.semi_major_axis > 0:
            raise InvalidOrbitError(f"semi_major_axis must be > 0 (got {self.semi_major_axis!r})")
        if not self.orbital_period > 0:
            raise InvalidOrbitError(f"orbital_period must be > 0 (got {self.orbital_period!r})")
        if not 0.0 <= self.eccentricity < 1.0:
            raise InvalidOrbitError(
                f"eccentricity must be in [0, 1) for a closed orbit (got {self.eccentricity!r})"
            )
        if self.direction not in (PROGRADE, RETROGRADE):
            raise InvalidOrbitError(f"direction must be '{PROGRADE}' or '{RETROGRADE}' (got {self.direction!r})")

    @property
    def retrograde(self) -> bool:
        return self.direction == RETROGRADE

    def angular_velocity(self) -> float:
        w = TWO_PI / self.orbital_period
        return -w if self.retrograde else w

    def radius_at(self, anomaly: float) -> float:
        a, e = self.semi_major_axis, self.eccentricity
        return a * (1.0 - e * e) / (1.0 + e * math.cos(anomaly))


class OrbitingBody:
    """
    Registry entry owned by OrbitalPropagator.
    """
    def __init__(self, body_id: str, elements: OrbitalElements, sink: Optional[PositionSink] = None):
        self.body_id = body_id
        self.elements = elements
        self.sink = sink
        self.angular_velocity = elements.angular_velocity()
        self.current_anomaly = wrap_angle(elements.true_anomaly)
        self.elapsed = 0.0

    def __repr__(self):
        return (
            f"OrbitingBody({self.body_id!r}, anomaly={self.current_anomaly:.6f}, "
            f"elapsed={self.elapsed})"
        )
