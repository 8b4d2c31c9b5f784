"""
Visualization-grade orbital propagator around a fixed primary body.

The phase angle of each body advances linearly in time (2*pi per period) and is
used directly as the true anomaly in the orbit equation. That is exact only for
circular orbits; eccentric orbits keep the right shape but not Kepler's timing.
Positions use rotations in the order inclination (X), argument of periapsis (Z),
longitude of ascending node (Z), then a translation by the primary position.
"""
from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import Dict, Iterator, List, Optional

import numpy as np

from asteroid_threat.config.settings import ORBIT_DEFAULT_SEGMENTS, ORBIT_G, PRIMARY_RADIUS
from asteroid_threat.models.orbit import (
    TWO_PI,
    OrbitalElements,
    OrbitingBody,
    PositionSink,
    wrap_angle,
)
from asteroid_threat.physics.state import State
from asteroid_threat.physics.utils import rotation_x, rotation_z

logger = logging.getLogger(__name__)


def orbital_plane_point(elements: OrbitalElements, anomaly: float) -> np.ndarray:
    r = elements.radius_at(anomaly)
    return np.array([r * math.cos(anomaly), r * math.sin(anomaly), 0.0])


def orientation_matrix(elements: OrbitalElements) -> np.ndarray:
    """Rz(node) @ Rz(periapsis) @ Rx(inclination)."""
    return (
        rotation_z(elements.longitude_of_ascending_node)
        @ rotation_z(elements.argument_of_periapsis)
        @ rotation_x(elements.inclination)
    )


def position_on_orbit(elements: OrbitalElements, anomaly: float, center=None) -> np.ndarray:
    pos = orientation_matrix(elements) @ orbital_plane_point(elements, anomaly)
    if center is not None:
        pos = pos + center
    return pos


class OrbitPath:
    """
    Closed orbit polyline: segments+1 points at evenly spaced anomalies in [0, 2*pi].
    Iterating twice yields the same points.
    """
    def __init__(self, elements: OrbitalElements, segments: int, center: np.ndarray):
        if int(segments) < 1:
            raise ValueError("segments must be >= 1")
        self.elements = elements
        self.segments = int(segments)
        self.center = np.array(center, dtype=float)

    def __len__(self) -> int:
        return self.segments + 1

    def __iter__(self) -> Iterator[np.ndarray]:
        rot = orientation_matrix(self.elements)
        for i in range(self.segments + 1):
            angle = (i / self.segments) * TWO_PI
            yield rot @ orbital_plane_point(self.elements, angle) + self.center

    def to_array(self) -> np.ndarray:
        return np.array(list(self), dtype=float)


class OrbitalPropagator:
    """
    Registry of orbiting bodies keyed by id. Unknown ids are silent no-ops
    (queries return None) so cleanup code can call removal repeatedly.
    """

    def __init__(self, center=(0.0, 0.0, 0.0), primary_radius: float = PRIMARY_RADIUS, g: float = ORBIT_G):
        self._center = np.array(center, dtype=float)
        if self._center.shape != (3,):
            raise ValueError("center must be a 3D vector")
        self.primary_radius = float(primary_radius)
        self.g = float(g)
        self._bodies: Dict[str, OrbitingBody] = {}

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    # -------------------------
    # Registry
    # -------------------------
    def register_body(self, body_id: str, elements: OrbitalElements, sink: Optional[PositionSink] = None) -> None:
        elements.validate()
        if body_id in self._bodies:
            logger.debug("Replacing orbital body %s", body_id)

        body = OrbitingBody(body_id, elements, sink)
        self._bodies[body_id] = body
        self._push_position(body)

        logger.info(
            "Registered orbital body %s (a=%s, e=%s, period=%s)",
            body_id, elements.semi_major_axis, elements.eccentricity, elements.orbital_period,
        )

    def remove_body(self, body_id: str) -> None:
        if self._bodies.pop(body_id, None) is not None:
            logger.info("Removed orbital body %s", body_id)

    def clear(self) -> None:
        self._bodies.clear()
        logger.debug("Orbital registry cleared")

    def body_ids(self) -> List[str]:
        return list(self._bodies)

    def __contains__(self, body_id) -> bool:
        return body_id in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)

    # -------------------------
    # Time stepping
    # -------------------------
    def advance(self, delta_time: float) -> None:
        """
        Advance every body by the same delta_time. New anomalies are computed for
        the whole registry before any body or sink is touched.
        """
        dt = float(delta_time)
        updated = {
            body_id: wrap_angle(body.current_anomaly + body.angular_velocity * dt)
            for body_id, body in self._bodies.items()
        }
        for body_id, anomaly in updated.items():
            body = self._bodies[body_id]
            body.current_anomaly = anomaly
            body.elapsed += dt
        for body in self._bodies.values():
            self._push_position(body)

    # -------------------------
    # Queries
    # -------------------------
    def _position(self, body: OrbitingBody) -> np.ndarray:
        return position_on_orbit(body.elements, body.current_anomaly, self._center)

    def _velocity(self, body: OrbitingBody) -> np.ndarray:
        el = body.elements
        nu = body.current_anomaly
        r = el.radius_at(nu)
        speed = math.sqrt(self.g * (2.0 / r - 1.0 / el.semi_major_axis))
        direction = np.array([-math.sin(nu), math.cos(nu), 0.0])
        direction /= np.linalg.norm(direction)
        return direction * speed

    def _push_position(self, body: OrbitingBody) -> None:
        if body.sink is not None:
            body.sink(self._position(body))

    def position_at(self, body_id: str) -> Optional[np.ndarray]:
        body = self._bodies.get(body_id)
        if body is None:
            return None
        return self._position(body)

    def velocity_at(self, body_id: str) -> Optional[np.ndarray]:
        body = self._bodies.get(body_id)
        if body is None:
            return None
        return self._velocity(body)

    def state_of(self, body_id: str) -> Optional[State]:
        body = self._bodies.get(body_id)
        if body is None:
            return None
        return State(self._position(body), self._velocity(body), body.current_anomaly)

    def anomaly_of(self, body_id: str) -> Optional[float]:
        body = self._bodies.get(body_id)
        return None if body is None else body.current_anomaly

    def orbit_path(self, body_id: str, segments: int = ORBIT_DEFAULT_SEGMENTS) -> Optional[OrbitPath]:
        body = self._bodies.get(body_id)
        if body is None:
            return None
        return OrbitPath(body.elements, segments, self._center)

    def debug_info(self) -> dict:
        return {
            "center": self._center.tolist(),
            "primary_radius": self.primary_radius,
            "total_bodies": len(self._bodies),
            "bodies": {
                body_id: {
                    "position": self._position(body).tolist(),
                    "current_anomaly": body.current_anomaly,
                    "elapsed": body.elapsed,
                    "angular_velocity": body.angular_velocity,
                    "elements": asdict(body.elements),
                }
                for body_id, body in self._bodies.items()
            },
        }
