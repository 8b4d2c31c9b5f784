import dataclasses

from asteroid_threat.config import settings


def _as_float(x, default):
    """Missing, zero or unparsable values fall back to default."""
    try:
        if x is None:
            return default
        val = float(x)
    except (TypeError, ValueError):
        return default
    return val if val else default


def with_defaults(asteroid):
    """Copy of `asteroid` with None diameter, velocity or probability replaced by the scoring defaults."""
    changes = {}
    if asteroid.diameter is None:
        changes["diameter"] = settings.THREAT_DEFAULT_DIAMETER_KM
    if asteroid.velocity is None:
        changes["velocity"] = settings.THREAT_DEFAULT_VELOCITY_KM_S
    if asteroid.impact_probability is None:
        changes["impact_probability"] = settings.THREAT_DEFAULT_PROBABILITY
    return dataclasses.replace(asteroid, **changes) if changes else asteroid


def threat_score(asteroid):
    """impact_probability * diameter^2 * velocity^2 (km, km/s)."""
    p = _as_float(getattr(asteroid, "impact_probability", None), settings.THREAT_DEFAULT_PROBABILITY)
    d = _as_float(getattr(asteroid, "diameter", None), settings.THREAT_DEFAULT_DIAMETER_KM)
    v = _as_float(getattr(asteroid, "velocity", None), settings.THREAT_DEFAULT_VELOCITY_KM_S)
    return p * d ** 2 * v ** 2


def threat_level(asteroid):
    score = threat_score(asteroid)
    if score > 1000:
        return "CATASTROPHIC"
    if score > 100:
        return "SEVERE"
    if score > 10:
        return "HIGH"
    if score > 1:
        return "MEDIUM"
    return "LOW"


def prioritize_threats(threats):
    """
    New list ordered by descending threat score. Equal scores keep their
    input order (sorted() is stable).
    """
    return sorted(threats or [], key=lambda a: -threat_score(a))


def validate_asteroid(asteroid):
    """
    Check a record before handing it to the planner.
    Returns {"is_valid": bool, "issues": [str, ...]}.
    """
    issues = []

    diameter = getattr(asteroid, "diameter", None)
    if not diameter or diameter <= 0:
        issues.append("Invalid asteroid diameter")

    velocity = getattr(asteroid, "velocity", None)
    if not velocity or velocity <= 0:
        issues.append("Invalid asteroid velocity")

    if not getattr(asteroid, "composition", None):
        issues.append("Unknown asteroid composition")

    probability = getattr(asteroid, "impact_probability", None)
    if probability is not None and not 0.0 <= probability <= 1.0:
        issues.append("Impact probability outside [0, 1]")

    return {"is_valid": not issues, "issues": issues}
