# asteroid_threat/models/results.py
"""
Result records returned by the impact engine and the defense planner.
Numbers stay numeric (SI unless the field name says otherwise); display
strings live in separate *_text fields.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Optional, Tuple


class _AsDict:
    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EnergyResult(_AsDict):
    joules: float
    kilotons: float
    megatons: float
    hiroshima_units: float
    equivalent: str


@dataclass(frozen=True)
class CraterResult(_AsDict):
    transient_diameter: float    # km
    final_diameter: float        # km
    depth: float                 # km
    volume: float
    ejecta_mass: float
    crater_type: str


@dataclass(frozen=True)
class SeismicResult(_AsDict):
    magnitude: float
    intensity: Dict[str, float]
    intensity_description: Dict[str, str]
    felt_radius_km: float
    damage_radius_km: float
    felt_arrival_s: float


@dataclass(frozen=True)
class AtmosphericResult(_AsDict):
    fireball_radius_km: float
    fireball_duration_s: float
    airburst: bool
    airburst_height_km: Optional[float]
    overpressure_5psi_km: float
    overpressure_20psi_km: float


@dataclass(frozen=True)
class TsunamiResult(_AsDict):
    initial_height: float            # m
    coastal_height: float            # m
    inundation_distance_km: float
    warning_time_min: float
    affected_coastline_km: float


@dataclass(frozen=True)
class ClimateResult(_AsDict):
    dust_mass: float
    soot_mass: float
    temperature_change: float        # deg C
    duration_years: float
    global_effects: bool
    agricultural_impact: str
    mechanisms: Tuple[str, ...] = (
        "Dust and aerosol injection",
        "Reduced solar radiation",
        "Potential ozone layer damage",
    )


@dataclass(frozen=True)
class EconomicResult(_AsDict):
    infrastructure: float            # USD
    casualties: float
    agriculture: float
    global_impact: float
    total: float
    gdp_impact_percent: float
    total_text: str


@dataclass(frozen=True)
class CasualtyResult(_AsDict):
    immediate: float
    severe_injuries: float
    moderate_injuries: float
    long_term: float
    total: float


@dataclass(frozen=True)
class ImpactResult(_AsDict):
    energy: EnergyResult
    crater: CraterResult
    seismic: SeismicResult
    atmospheric: AtmosphericResult
    tsunami: Optional[TsunamiResult]
    climate: ClimateResult
    economic: EconomicResult
    casualties: CasualtyResult
    severity: str
    torino_scale: int


@dataclass(frozen=True)
class RiskAssessment(_AsDict):
    level: str
    message: str


@dataclass(frozen=True)
class DeflectionResult(_AsDict):
    method_id: str
    method: str
    description: str
    required_delta_v: float          # m/s
    achievable_delta_v: float        # m/s
    success_probability: float       # [0, 1]
    will_miss: bool
    miss_distance: float             # m
    miss_distance_text: str
    development_time: float          # years
    cost: float                      # millions USD
    technology_readiness: int
    recommendation: str
    risk: RiskAssessment


@dataclass(frozen=True)
class TimelineEntry(_AsDict):
    year: int
    asteroid: str
    method: str
    cost: float
    success_probability: float
    threat_level: str
    threat_score: float


@dataclass(frozen=True)
class DefensePlan(_AsDict):
    timeline: Tuple[TimelineEntry, ...]
    budget: float
    total_cost: float
    remaining_budget: float
    threats_mitigated: int
    success_probability: float
    efficiency: float                # percent of threats mitigated
    resource_allocation: Dict[str, float] = field(default_factory=dict)
