# asteroid_threat/models/defense_methods.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Union

from asteroid_threat.errors import UnknownMethodError


@dataclass(frozen=True)
class DefenseMethodSpec:
    name: str
    description: str
    effectiveness: float         # [0, 1]
    cost: float                  # millions USD
    development_time: float      # years
    success_rate: float          # [0, 1]
    technology_readiness: int    # 1-10


class DefenseMethod(Enum):
    KINETIC_IMPACTOR = DefenseMethodSpec(
        name="Kinetic Impactor",
        description="Spacecraft collides with asteroid to change its velocity",
        effectiveness=0.7,
        cost=500.0,
        development_time=5.0,
        success_rate=0.85,
        technology_readiness=9,
    )
    GRAVITY_TRACTOR = DefenseMethodSpec(
        name="Gravity Tractor",
        description="Spacecraft uses gravity to slowly pull asteroid",
        effectiveness=0.4,
        cost=800.0,
        development_time=8.0,
        success_rate=0.95,
        technology_readiness=6,
    )
    NUCLEAR_DEVICE = DefenseMethodSpec(
        name="Nuclear Disruption",
        description="Nuclear explosion to fragment or deflect asteroid",
        effectiveness=0.9,
        cost=2000.0,
        development_time=3.0,
        success_rate=0.75,
        technology_readiness=7,
    )
    LASER_ABLATION = DefenseMethodSpec(
        name="Laser Ablation",
        description="Lasers vaporize asteroid surface to create thrust",
        effectiveness=0.6,
        cost=1200.0,
        development_time=10.0,
        success_rate=0.80,
        technology_readiness=4,
    )
    ION_BEAM = DefenseMethodSpec(
        name="Ion Beam Shepherd",
        description="Ion engines directed at asteroid surface",
        effectiveness=0.5,
        cost=1500.0,
        development_time=12.0,
        success_rate=0.88,
        technology_readiness=3,
    )

    @property
    def spec(self) -> DefenseMethodSpec:
        return self.value

    @classmethod
    def lookup(cls, method: Union["DefenseMethod", str]) -> "DefenseMethod":
        if isinstance(method, cls):
            return method
        try:
            return cls[str(method)]
        except KeyError:
            raise UnknownMethodError(f"Unknown defense method: {method}") from None


def list_methods() -> list:
    """Catalog as plain dicts, in catalog order."""
    return [{"id": m.name, **asdict(m.spec)} for m in DefenseMethod]


# Reference record for the kinetic impactor, shown alongside plans.
DART_MISSION = {
    "name": "DART (Double Asteroid Redirection Test)",
    "target": "Dimorphos",
    "launch_date": "2021-11-24",
    "impact_date": "2022-09-26",
    "impact_speed_km_s": 6.1,
    "mass_kg": 500.0,
    "cost_musd": 324.0,
    "orbital_period_before": "11 hours 55 minutes",
    "orbital_period_after": "11 hours 23 minutes",
    "period_change_minutes": 32.0,
    "success": True,
    "lessons": (
        "Kinetic impact technology is viable for planetary defense",
        "Precise navigation and targeting is achievable",
        "International collaboration enhances mission success",
        "Early detection provides more deflection options",
    ),
}
