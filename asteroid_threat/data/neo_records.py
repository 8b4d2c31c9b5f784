"""
Adapter from NASA NeoWs-shaped records (feed / browse / lookup JSON) to
AsteroidPhysicalData.

Pure parsing: the caller supplies already-downloaded payloads or a JSON file.
Bad records are logged and skipped so one broken entry does not sink a batch.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Iterable, List, Optional

from asteroid_threat.config.settings import (
    NEO_DEFAULT_COMPOSITION,
    NEO_DEFAULT_DIAMETER_KM,
    NEO_DEFAULT_VELOCITY_KM_S,
)
from asteroid_threat.errors import InvalidOrbitError
from asteroid_threat.models.asteroid import AsteroidPhysicalData
from asteroid_threat.models.orbit import OrbitalElements, wrap_angle
from asteroid_threat.physics.utils import degrees_to_radians, solve_kepler

logger = logging.getLogger(__name__)


def _as_float(x) -> Optional[float]:
    try:
        val = float(x)
    except (TypeError, ValueError):
        return None
    return val if math.isfinite(val) else None


def average_diameter(estimate: Optional[dict]) -> float:
    """Mean of estimated_diameter_min/max in km; default when absent."""
    if not estimate:
        return NEO_DEFAULT_DIAMETER_KM
    lo = _as_float(estimate.get("estimated_diameter_min"))
    hi = _as_float(estimate.get("estimated_diameter_max"))
    if lo is None or hi is None:
        return NEO_DEFAULT_DIAMETER_KM
    return (lo + hi) / 2.0


def estimate_composition(record: dict) -> str:
    """Spectral class first (C, S, M), then albedo, else carbonaceous."""
    spectral = record.get("spectral_type")
    if spectral:
        if "C" in spectral:
            return "carbonaceous"
        if "S" in spectral:
            return "stony"
        if "M" in spectral:
            return "metal"

    albedo = _as_float(record.get("albedo"))
    if albedo is not None:
        if albedo < 0.1:
            return "carbonaceous"
        if albedo > 0.2:
            return "metal"

    return NEO_DEFAULT_COMPOSITION


def estimate_impact_probability(record: dict) -> float:
    """Coarse prior from the hazard flag and absolute magnitude H."""
    if not record.get("is_potentially_hazardous_asteroid"):
        return 1e-7

    magnitude = _as_float(record.get("absolute_magnitude_h"))
    probability = 1e-6
    if magnitude is not None:
        if magnitude < 18:
            probability = 1e-4
        elif magnitude < 20:
            probability = 1e-5
    return probability


def approach_velocity(record: dict) -> float:
    approaches = record.get("close_approach_data") or []
    if approaches:
        rel = approaches[0].get("relative_velocity") or {}
        v = _as_float(rel.get("kilometers_per_second"))
        if v:
            return v
    return NEO_DEFAULT_VELOCITY_KM_S


def true_from_mean_anomaly(mean_anomaly: float, eccentricity: float) -> float:
    E = solve_kepler(mean_anomaly, eccentricity)
    return 2.0 * math.atan2(
        math.sqrt(1.0 + eccentricity) * math.sin(E / 2.0),
        math.sqrt(1.0 - eccentricity) * math.cos(E / 2.0),
    )


def orbit_from_neo(orbital_data: Optional[dict]) -> Optional[OrbitalElements]:
    """
    NeoWs orbital_data -> OrbitalElements (AU, radians, days).
    Returns None when the block is missing, incomplete or not a closed orbit.
    """
    if not orbital_data:
        return None

    a = _as_float(orbital_data.get("semi_major_axis"))
    e = _as_float(orbital_data.get("eccentricity"))
    period = _as_float(orbital_data.get("orbital_period"))
    if a is None or e is None or period is None:
        return None

    def _angle(key):
        deg = _as_float(orbital_data.get(key))
        return degrees_to_radians(deg) if deg is not None else 0.0

    if not 0.0 <= e < 1.0:
        logger.warning("Ignoring orbital_data: eccentricity %r is not a closed orbit", e)
        return None

    elements = OrbitalElements(
        semi_major_axis=a,
        eccentricity=e,
        inclination=_angle("inclination"),
        argument_of_periapsis=_angle("perihelion_argument"),
        longitude_of_ascending_node=_angle("ascending_node_longitude"),
        true_anomaly=wrap_angle(true_from_mean_anomaly(_angle("mean_anomaly"), e)),
        orbital_period=period,
    )
    try:
        elements.validate()
    except InvalidOrbitError as exc:
        logger.warning("Ignoring orbital_data: %s", exc)
        return None
    return elements


def asteroid_from_neo(record: dict) -> AsteroidPhysicalData:
    """Map one NeoWs object. Raises TypeError on non-dict input."""
    if not isinstance(record, dict):
        raise TypeError(f"NEO record must be a dict (got {type(record).__name__})")

    diameters = (record.get("estimated_diameter") or {}).get("kilometers")
    return AsteroidPhysicalData(
        diameter=average_diameter(diameters),
        velocity=approach_velocity(record),
        composition=estimate_composition(record),
        impact_probability=estimate_impact_probability(record),
        orbit=orbit_from_neo(record.get("orbital_data")),
        name=record.get("name"),
        asteroid_id=None if record.get("id") is None else str(record.get("id")),
        hazardous=bool(record.get("is_potentially_hazardous_asteroid")),
    )


def asteroids_from_records(records: Iterable[dict]) -> List[AsteroidPhysicalData]:
    out = []
    for rec in records:
        try:
            out.append(asteroid_from_neo(rec))
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping malformed NEO record %r: %s", rec.get("id") if isinstance(rec, dict) else rec, exc)
    return out


def asteroids_from_feed(payload: dict) -> List[AsteroidPhysicalData]:
    """
    Flatten a feed payload: {"near_earth_objects": {"YYYY-MM-DD": [neo, ...]}}.
    Browse payloads ({"near_earth_objects": [neo, ...]}) are accepted as well.
    """
    neos = (payload or {}).get("near_earth_objects") or {}
    if isinstance(neos, dict):
        records = [neo for day in neos.values() for neo in (day or [])]
    else:
        records = list(neos)
    asteroids = asteroids_from_records(records)
    logger.info("Parsed %d/%d NEO records", len(asteroids), len(records))
    return asteroids


def load_records(path) -> List[AsteroidPhysicalData]:
    """
    Read a JSON file holding a feed payload, a single NEO record or a list
    of records.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        return asteroids_from_records(data)
    if isinstance(data, dict) and "near_earth_objects" in data:
        return asteroids_from_feed(data)
    return asteroids_from_records([data])
