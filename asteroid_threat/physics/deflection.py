# asteroid_threat/physics/deflection.py
"""
Delta-v bookkeeping for deflection missions.
Time to impact is in years throughout; delta-v in m/s; masses in kg.
"""
import math

from asteroid_threat.config import settings
from asteroid_threat.config.settings import strength_for
from asteroid_threat.models.defense_methods import DefenseMethod


def _divide(num, den):
    # zero mass or zero warning time yields inf/nan instead of raising
    if den == 0:
        if num == 0 or math.isnan(num):
            return float("nan")
        return math.copysign(float("inf"), num)
    return num / den


def years_to_seconds(years):
    return years * settings.SECONDS_PER_YEAR


def required_delta_v(time_to_impact):
    """Velocity change that shifts the arrival point by two Earth radii."""
    return _divide(settings.EARTH_RADIUS * settings.REQUIRED_MISS_EARTH_RADII, years_to_seconds(time_to_impact))


def kinetic_impactor_delta_v(asteroid_mass, time_to_impact=None):
    momentum = settings.KINETIC_IMPACTOR_MASS * settings.KINETIC_IMPACTOR_VELOCITY * settings.KINETIC_BETA
    return _divide(momentum, asteroid_mass)


def gravity_tractor_delta_v(asteroid_mass, time_to_impact):
    # the tractor pulls with its own gravity, so the asteroid's mass drops out
    acceleration = settings.G * settings.TRACTOR_MASS / settings.TRACTOR_STANDOFF ** 2
    return acceleration * years_to_seconds(time_to_impact)


def nuclear_delta_v(asteroid_mass, time_to_impact=None):
    ratio = _divide(2.0 * settings.NUCLEAR_YIELD_J * settings.NUCLEAR_EFFICIENCY, asteroid_mass)
    return float("nan") if ratio < 0 else math.sqrt(ratio)


def _thrust(power, isp, efficiency):
    return (2.0 * power * efficiency) / (isp * settings.STANDARD_GRAVITY)


def laser_ablation_delta_v(asteroid_mass, time_to_impact):
    thrust = _thrust(settings.LASER_POWER_W, settings.LASER_ISP_S, settings.LASER_EFFICIENCY)
    return _divide(thrust, asteroid_mass) * years_to_seconds(time_to_impact)


def ion_beam_delta_v(asteroid_mass, time_to_impact):
    thrust = _thrust(settings.ION_POWER_W, settings.ION_ISP_S, settings.ION_EFFICIENCY)
    return _divide(thrust, asteroid_mass) * years_to_seconds(time_to_impact)


DELTA_V_MODELS = {
    DefenseMethod.KINETIC_IMPACTOR: kinetic_impactor_delta_v,
    DefenseMethod.GRAVITY_TRACTOR: gravity_tractor_delta_v,
    DefenseMethod.NUCLEAR_DEVICE: nuclear_delta_v,
    DefenseMethod.LASER_ABLATION: laser_ablation_delta_v,
    DefenseMethod.ION_BEAM: ion_beam_delta_v,
}


def achievable_delta_v(method: DefenseMethod, asteroid_mass, time_to_impact):
    """Raw method delta-v scaled by the method's effectiveness factor."""
    raw = DELTA_V_MODELS[method](asteroid_mass, time_to_impact)
    return raw * method.spec.effectiveness


def time_factor(time_to_impact):
    for min_years, factor in settings.TIME_FACTOR_STEPS:
        if time_to_impact >= min_years:
            return factor
    return settings.TIME_FACTOR_FLOOR


def success_probability(method: DefenseMethod, time_to_impact):
    return method.spec.success_rate * time_factor(time_to_impact)


def miss_distance(delta_v, time_to_impact):
    """Along-track displacement (m) accumulated from delta_v over the warning time."""
    return delta_v * years_to_seconds(time_to_impact)


def deflection_requirements(velocity, miss_distance_km, time_to_impact):
    """
    Deflection angle (deg) and transverse delta-v (km/s) that displace an
    asteroid moving at `velocity` km/s by miss_distance_km kilometers before impact.
    """
    angle = math.atan(_divide(miss_distance_km, velocity * years_to_seconds(time_to_impact)))
    return {
        "angle_deg": math.degrees(angle),
        "delta_v": velocity * math.tan(angle),
        "time_to_impact": time_to_impact,
    }


def simulate_fragmentation(diameter, composition, defense_energy):
    """
    Compare deposited energy against strength * cross-section. Above the
    critical energy the body breaks into floor(E/Ec) fragments.
    """
    critical = strength_for(composition) * math.pi * (diameter * 500.0) ** 2
    ratio = _divide(defense_energy, critical)
    if ratio > 1:
        return {
            "fragmented": True,
            "fragment_count": int(math.floor(ratio)) if math.isfinite(ratio) else ratio,
            "average_fragment_size": diameter / math.sqrt(ratio),
        }
    return {
        "fragmented": False,
        "damage_percent": ratio * 100.0,
    }
