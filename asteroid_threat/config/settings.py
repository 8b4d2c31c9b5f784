"""
Project settings (constants + small helpers).
Units: meters (m), seconds (s), kilograms (kg), unless a name says otherwise
(_KM, _KT, _MT, _YEARS, _MUSD).
"""
from __future__ import annotations

import math
import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
RUN_ID_PREFIX = "assessment"
VALIDATE_ON_IMPORT = False

# Physical constants
G = 6.67430e-11
EARTH_RADIUS = 6371000.0
STANDARD_GRAVITY = 9.81
SECONDS_PER_YEAR = 31536000.0
AU_KM = 149597870.7

# Energy units
HIROSHIMA_J = 6.3e13       # 15 kt
KILOTON_J = 4.184e12
MEGATON_J = 4.184e15
TSAR_BOMBA_MT = 50.0
TERAJOULE_J = 1e12

# Materials (kg/m^3, Pa)
DENSITY_ROCK = 3000.0
DENSITY_IRON = 7800.0
DENSITY_CARBON = 2000.0
DENSITY_ICE = 1000.0

COMPOSITION_DENSITY = {
    "stony": DENSITY_ROCK,
    "iron": DENSITY_IRON,
    "carbonaceous": DENSITY_CARBON,
    "metal": DENSITY_IRON,
    "rock": DENSITY_ROCK,
    "ice": DENSITY_ICE,
}

COMPOSITION_STRENGTH = {
    "stony": 1e7,
    "iron": 3e8,
    "carbonaceous": 5e6,
    "metal": 3e8,
    "rock": 1e7,
    "ice": 1e6,
}

DEFAULT_COMPOSITION = "rock"

# Orbit propagation (scene units, visualization only)
ORBIT_G = 1.0
ORBIT_DEFAULT_SEGMENTS = 64
ORBIT_DEFAULT_SEMI_MAJOR_AXIS = 3.0
ORBIT_DEFAULT_PERIOD = 100.0
PRIMARY_RADIUS = 1.0

# Impact context defaults
DEFAULT_IMPACT_ANGLE_DEG = 45.0
DEFAULT_TERRAIN = "land"
DEFAULT_WATER_DEPTH = 0.0
DEFAULT_POPULATION_DENSITY = 50.0      # people / km^2
DEFAULT_DISTANCE_TO_SHORE_KM = 100.0
DEFAULT_INFRASTRUCTURE = "rural"

# Crater
CRATER_COEFF = 1.16
CRATER_ENERGY_EXPONENT = 0.217
CRATER_COMPLEX_THRESHOLD_KM = 4.0
CRATER_COLLAPSE_COEFF = 1.2
CRATER_COLLAPSE_EXPONENT = 1.13
CRATER_DEPTH_RATIO = 0.2
CRATER_VOLUME_FILL = 0.1
CRUST_DENSITY = 2700.0

TERRAIN_CRATER_FACTOR = {
    "ocean": 0.3,
    "sedimentary": 1.2,
    "crystalline": 0.8,
}

# Seismic
SEISMIC_EFFICIENCY = 1e-5
SEISMIC_FELT_INTENSITY = 2.0
SEISMIC_DAMAGE_INTENSITY = 6.0
SEISMIC_WAVE_SPEED_KM_S = 5.0

INTENSITY_DESCRIPTIONS = {
    1: "Not felt",
    2: "Weak",
    3: "Slight",
    4: "Moderate",
    5: "Strong",
    6: "Very strong",
    7: "Severe",
    8: "Violent",
    9: "Extreme",
    10: "Catastrophic",
}

# Atmosphere
FIREBALL_COEFF_KM = 1.5
FIREBALL_DURATION_COEFF_S = 0.1
FIREBALL_EXPONENT = 0.4
AIRBURST_MIN_DIAMETER_KM = 0.1
AIRBURST_COEFF_KM = 8.5
AIRBURST_EXPONENT = 0.45
OVERPRESSURE_5PSI_COEFF = 2.5
OVERPRESSURE_20PSI_COEFF = 1.0

# Tsunami
TSUNAMI_MIN_DEPTH = 100.0
TSUNAMI_ENERGY_FRACTION = 0.1
TSUNAMI_HEIGHT_COEFF = 0.5
TSUNAMI_ATTENUATION_KM = 1000.0
TSUNAMI_DANGER_HEIGHT = 1.0
DEFAULT_SHELF_SLOPE = 0.005

SHELF_SLOPE = {
    "flat": 0.001,
    "coastal_plain": 0.002,
    "hilly": 0.01,
    "mountainous": 0.05,
}

# Climate
DUST_FRACTION = 0.1
SOOT_FRACTION = 0.01
SOOT_ENERGY_THRESHOLD = 1e18
DUST_OPACITY_NORM = 1e12
SOOT_OPACITY_NORM = 1e11
COOLING_PER_OPACITY = -5.0
CLIMATE_DURATION_PER_OPACITY = 2.0
CLIMATE_MAX_DURATION_YEARS = 10.0
GLOBAL_COOLING_THRESHOLD = -1.0

# Economics (USD)
INFRASTRUCTURE_DENSITY_MUSD = {
    "urban": 1000.0,
    "suburban": 200.0,
    "rural": 50.0,
    "wilderness": 5.0,
    "ocean": 1.0,
}
DEFAULT_INFRASTRUCTURE_DENSITY_MUSD = 50.0
VALUE_OF_LIFE = 1e6
INJURY_COST = 2e5
AGRICULTURE_LOSS_GLOBAL = 5e5      # USD / km^2
AGRICULTURE_LOSS_LOCAL = 1e5
GLOBAL_ECONOMIC_IMPACT = 1e12
WORLD_GDP = 80e12

# Casualties
CASUALTY_RING_IMMEDIATE = 3.0
CASUALTY_RING_SEVERE = 10.0
CASUALTY_RING_MODERATE = 50.0
SEVERE_INJURY_RATE = 0.5
MODERATE_INJURY_RATE = 0.2
LONG_TERM_RATE = 0.1

# Defense
REQUIRED_MISS_EARTH_RADII = 2.0
KINETIC_IMPACTOR_MASS = 500.0
KINETIC_IMPACTOR_VELOCITY = 6000.0
KINETIC_BETA = 3.4
TRACTOR_MASS = 20000.0
TRACTOR_STANDOFF = 50.0
NUCLEAR_YIELD_J = 1e15
NUCLEAR_EFFICIENCY = 0.1
LASER_POWER_W = 1e6
LASER_ISP_S = 1000.0
LASER_EFFICIENCY = 0.01
ION_POWER_W = 5e5
ION_ISP_S = 3000.0
ION_EFFICIENCY = 0.007

# (min years, factor), checked top-down
TIME_FACTOR_STEPS = (
    (20.0, 1.0),
    (10.0, 0.9),
    (5.0, 0.7),
    (2.0, 0.5),
    (1.0, 0.3),
)
TIME_FACTOR_FLOOR = 0.1

SAFE_MISS_DISTANCE = 1e9           # m, LOW risk above this
INSUFFICIENT_METHOD_PENALTY = 0.5

RESOURCE_BUCKETS = {
    "research": 0.15,
    "development": 0.25,
    "deployment": 0.45,
    "monitoring": 0.10,
    "contingency": 0.05,
}

# Threat scoring defaults for incomplete records
THREAT_DEFAULT_PROBABILITY = 0.0
THREAT_DEFAULT_DIAMETER_KM = 0.1
THREAT_DEFAULT_VELOCITY_KM_S = 20.0

# NEO record adapter defaults
NEO_DEFAULT_DIAMETER_KM = 0.5
NEO_DEFAULT_VELOCITY_KM_S = 20.0
NEO_DEFAULT_COMPOSITION = "carbonaceous"


def density_for(composition: Optional[str]) -> float:
    key = str(composition or "").lower()
    return COMPOSITION_DENSITY.get(key, COMPOSITION_DENSITY[DEFAULT_COMPOSITION])


def strength_for(composition: Optional[str]) -> float:
    key = str(composition or "").lower()
    return COMPOSITION_STRENGTH.get(key, COMPOSITION_STRENGTH[DEFAULT_COMPOSITION])


def clamp_impact_angle(val: Optional[float]) -> float:
    out = float(DEFAULT_IMPACT_ANGLE_DEG if val is None else val)
    return max(1.0, min(90.0, out))


def validate_settings() -> None:
    if ORBIT_G <= 0:
        raise ValueError("ORBIT_G must be > 0")
    if ORBIT_DEFAULT_SEGMENTS < 1:
        raise ValueError("ORBIT_DEFAULT_SEGMENTS must be >= 1")
    if ORBIT_DEFAULT_PERIOD <= 0:
        raise ValueError("ORBIT_DEFAULT_PERIOD must be > 0")
    if any(d <= 0 for d in COMPOSITION_DENSITY.values()):
        raise ValueError("COMPOSITION_DENSITY values must be > 0")
    if DEFAULT_COMPOSITION not in COMPOSITION_DENSITY:
        raise ValueError("DEFAULT_COMPOSITION must be a key of COMPOSITION_DENSITY")
    if not 0.0 < DEFAULT_IMPACT_ANGLE_DEG <= 90.0:
        raise ValueError("DEFAULT_IMPACT_ANGLE_DEG must be in (0, 90]")
    if TSUNAMI_MIN_DEPTH < 0:
        raise ValueError("TSUNAMI_MIN_DEPTH must be >= 0")
    if SECONDS_PER_YEAR <= 0:
        raise ValueError("SECONDS_PER_YEAR must be > 0")

    factors = [f for _, f in TIME_FACTOR_STEPS] + [TIME_FACTOR_FLOOR]
    if factors != sorted(factors, reverse=True):
        raise ValueError("TIME_FACTOR_STEPS must be ordered by decreasing factor")
    if not math.isclose(sum(RESOURCE_BUCKETS.values()), 1.0):
        raise ValueError("RESOURCE_BUCKETS must sum to 1.0")


if VALIDATE_ON_IMPORT:
    validate_settings()
