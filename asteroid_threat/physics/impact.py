# asteroid_threat/physics/impact.py
"""
Closed-form impact effect estimates.

Units: diameter km, velocity km/s, energy J, distances km unless noted.
Formulas are scaling laws for ranking and display, not validated hazard models.
Invalid inputs (negative sizes, zero energy) are not rejected; NaN/inf pass through.
"""
import math
from typing import Optional

from asteroid_threat.config import settings
from asteroid_threat.config.settings import density_for
from asteroid_threat.models.asteroid import ImpactLocation
from asteroid_threat.models.results import (
    AtmosphericResult,
    ClimateResult,
    CraterResult,
    EnergyResult,
    SeismicResult,
    TsunamiResult,
)
from asteroid_threat.physics.utils import sphere_volume


def _pow(x, p):
    # float ** fractional raises on negatives; keep NaN visible instead
    if x < 0:
        return float("nan")
    return x ** p


def _log10(x):
    if x < 0 or math.isnan(x):
        return float("nan")
    if x == 0:
        return float("-inf")
    return math.log10(x)


# ---------- Energy ----------
def kinetic_energy(diameter, velocity, composition="rock"):
    density = density_for(composition)
    radius = diameter * 500.0
    mass = density * sphere_volume(radius)
    return 0.5 * mass * (velocity * 1000.0) ** 2


def energy_equivalent(energy):
    hiroshima = energy / settings.HIROSHIMA_J
    tsar = energy / (settings.TSAR_BOMBA_MT * settings.MEGATON_J)
    if hiroshima < 1:
        return f"{hiroshima:.2f} Hiroshima bombs"
    if tsar < 1:
        return f"{hiroshima:.0f} Hiroshima bombs"
    return f"{tsar:.1f} Tsar Bomba equivalents"


def energy_summary(energy) -> EnergyResult:
    return EnergyResult(
        joules=energy,
        kilotons=energy / settings.KILOTON_J,
        megatons=energy / settings.MEGATON_J,
        hiroshima_units=energy / settings.HIROSHIMA_J,
        equivalent=energy_equivalent(energy),
    )


# ---------- Crater ----------
def crater_formation(energy, impact_angle, terrain="land", composition="rock") -> CraterResult:
    """
    Transient diameter from energy in TJ with a sqrt(sin(angle)) obliquity factor,
    collapse above the simple/complex transition, then a terrain multiplier.
    composition is accepted for call compatibility; target scaling ignores it.
    """
    angle_factor = _pow(math.sin(math.radians(impact_angle)), 0.5)
    energy_tj = energy / settings.TERAJOULE_J

    transient = settings.CRATER_COEFF * _pow(energy_tj, settings.CRATER_ENERGY_EXPONENT) * angle_factor

    final = transient
    if transient > settings.CRATER_COMPLEX_THRESHOLD_KM:
        final = settings.CRATER_COLLAPSE_COEFF * _pow(transient, settings.CRATER_COLLAPSE_EXPONENT)

    final *= settings.TERRAIN_CRATER_FACTOR.get(str(terrain).lower(), 1.0)

    depth = final * settings.CRATER_DEPTH_RATIO
    volume = (math.pi / 6.0) * final ** 3 * settings.CRATER_VOLUME_FILL
    ejecta_mass = volume * settings.CRUST_DENSITY

    return CraterResult(
        transient_diameter=transient,
        final_diameter=final,
        depth=depth,
        volume=volume,
        ejecta_mass=ejecta_mass,
        crater_type="Complex Crater" if final > settings.CRATER_COMPLEX_THRESHOLD_KM else "Simple Crater",
    )


# ---------- Seismic ----------
def seismic_magnitude(energy):
    moment = energy * settings.SEISMIC_EFFICIENCY
    return (2.0 / 3.0) * _log10(moment) - 6.07


def seismic_intensity(magnitude, distance_km):
    base = magnitude * 2.0 - 4.0
    attenuation = math.log10(distance_km + 1.0) * 2.0
    value = base - attenuation
    if math.isnan(value):
        return value
    return max(1.0, value)


def intensity_description(intensity):
    """
    Ten-level scale keyed by floor(intensity). Intensities of 11 and up, or
    non-finite ones, fall off the table and read "Unknown".
    """
    if not math.isfinite(intensity):
        return "Unknown"
    return settings.INTENSITY_DESCRIPTIONS.get(int(math.floor(intensity)), "Unknown")


def radius_for_intensity(magnitude, intensity):
    """Distance (km) at which seismic_intensity drops to `intensity`; 0 if never reached."""
    exponent = (magnitude * 2.0 - 4.0 - intensity) / 2.0
    if math.isnan(exponent):
        return exponent
    return max(0.0, 10.0 ** exponent - 1.0)


def seismic_effects(energy, location: Optional[ImpactLocation] = None) -> SeismicResult:
    magnitude = seismic_magnitude(energy)
    intensity = {
        "epicenter": seismic_intensity(magnitude, 0.0),
        "at_100km": seismic_intensity(magnitude, 100.0),
        "at_1000km": seismic_intensity(magnitude, 1000.0),
    }
    felt = radius_for_intensity(magnitude, settings.SEISMIC_FELT_INTENSITY)
    return SeismicResult(
        magnitude=magnitude,
        intensity=intensity,
        intensity_description={k: intensity_description(v) for k, v in intensity.items()},
        felt_radius_km=felt,
        damage_radius_km=radius_for_intensity(magnitude, settings.SEISMIC_DAMAGE_INTENSITY),
        felt_arrival_s=felt / settings.SEISMIC_WAVE_SPEED_KM_S,
    )


# ---------- Atmosphere ----------
def airburst_height(diameter):
    return settings.AIRBURST_COEFF_KM * _pow(diameter, settings.AIRBURST_EXPONENT)


def overpressure_radii(energy):
    energy_kt = energy / settings.KILOTON_J
    scale = _pow(energy_kt, 1.0 / 3.0)
    return (
        settings.OVERPRESSURE_5PSI_COEFF * scale,
        settings.OVERPRESSURE_20PSI_COEFF * scale,
    )


def atmospheric_effects(energy, diameter) -> AtmosphericResult:
    energy_mt = energy / settings.MEGATON_J
    scale = _pow(energy_mt, settings.FIREBALL_EXPONENT)
    is_airburst = diameter > settings.AIRBURST_MIN_DIAMETER_KM
    psi5, psi20 = overpressure_radii(energy)
    return AtmosphericResult(
        fireball_radius_km=settings.FIREBALL_COEFF_KM * scale,
        fireball_duration_s=settings.FIREBALL_DURATION_COEFF_S * scale,
        airburst=is_airburst,
        airburst_height_km=airburst_height(diameter) if is_airburst else None,
        overpressure_5psi_km=psi5,
        overpressure_20psi_km=psi20,
    )


# ---------- Tsunami ----------
def coastal_wave_height(initial_height, distance_to_shore_km):
    return initial_height * math.exp(-distance_to_shore_km / settings.TSUNAMI_ATTENUATION_KM)


def inundation_distance(coastal_height, coastal_terrain=None):
    """Run-in (km) of a wave of coastal_height meters over a uniform shelf slope."""
    slope = settings.SHELF_SLOPE.get(str(coastal_terrain).lower(), settings.DEFAULT_SHELF_SLOPE)
    return coastal_height / slope / 1000.0


def tsunami_warning_time(distance_to_shore_km, water_depth):
    """Minutes for a shallow-water wave (c = sqrt(g*h)) to reach the shore."""
    speed = math.sqrt(settings.STANDARD_GRAVITY * water_depth)
    return distance_to_shore_km * 1000.0 / speed / 60.0


def affected_coastline(initial_height, distance_to_shore_km):
    """
    Length (km) of a straight coastline, distance_to_shore_km from the impact,
    that sees waves above TSUNAMI_DANGER_HEIGHT.
    """
    if initial_height <= settings.TSUNAMI_DANGER_HEIGHT:
        return 0.0
    reach = settings.TSUNAMI_ATTENUATION_KM * math.log(initial_height / settings.TSUNAMI_DANGER_HEIGHT)
    if reach <= distance_to_shore_km:
        return 0.0
    return 2.0 * math.sqrt(reach ** 2 - distance_to_shore_km ** 2)


def tsunami_effects(energy, water_depth, location: Optional[ImpactLocation] = None) -> Optional[TsunamiResult]:
    if water_depth < settings.TSUNAMI_MIN_DEPTH:
        return None

    location = location or ImpactLocation()
    wave_energy = energy * settings.TSUNAMI_ENERGY_FRACTION
    initial = settings.TSUNAMI_HEIGHT_COEFF * _pow(wave_energy / 1e15, 0.25)
    coastal = coastal_wave_height(initial, location.distance_to_shore)

    return TsunamiResult(
        initial_height=initial,
        coastal_height=coastal,
        inundation_distance_km=inundation_distance(coastal, location.coastal_terrain),
        warning_time_min=tsunami_warning_time(location.distance_to_shore, water_depth),
        affected_coastline_km=affected_coastline(initial, location.distance_to_shore),
    )


# ---------- Climate ----------
def agricultural_impact(temperature_change, duration):
    severity = abs(temperature_change) * duration
    if severity > 10:
        return "GLOBAL FAMINE RISK"
    if severity > 5:
        return "MAJOR CROP FAILURES"
    if severity > 2:
        return "REGIONAL FOOD SHORTAGES"
    if severity > 1:
        return "LOCALIZED CROP DAMAGE"
    return "MINOR IMPACT"


def climate_effects(energy, ejecta_mass) -> ClimateResult:
    dust = ejecta_mass * settings.DUST_FRACTION
    soot = dust * settings.SOOT_FRACTION if energy > settings.SOOT_ENERGY_THRESHOLD else 0.0

    opacity = dust / settings.DUST_OPACITY_NORM + soot / settings.SOOT_OPACITY_NORM
    cooling = settings.COOLING_PER_OPACITY * opacity
    duration = settings.CLIMATE_DURATION_PER_OPACITY * opacity
    if duration > settings.CLIMATE_MAX_DURATION_YEARS:
        duration = settings.CLIMATE_MAX_DURATION_YEARS

    return ClimateResult(
        dust_mass=dust,
        soot_mass=soot,
        temperature_change=cooling,
        duration_years=duration,
        global_effects=cooling < settings.GLOBAL_COOLING_THRESHOLD,
        agricultural_impact=agricultural_impact(cooling, duration),
    )
