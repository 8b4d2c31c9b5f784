# asteroid_threat/models/asteroid.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from asteroid_threat.config.settings import (
    DEFAULT_COMPOSITION,
    DEFAULT_DISTANCE_TO_SHORE_KM,
    DEFAULT_IMPACT_ANGLE_DEG,
    DEFAULT_INFRASTRUCTURE,
    DEFAULT_TERRAIN,
    DEFAULT_POPULATION_DENSITY,
    DEFAULT_WATER_DEPTH,
    density_for,
    strength_for,
)
from asteroid_threat.models.orbit import OrbitalElements
from asteroid_threat.physics.utils import sphere_volume


class Composition(str, Enum):
    STONY = "stony"
    IRON = "iron"
    CARBONACEOUS = "carbonaceous"
    METAL = "metal"
    ROCK = "rock"
    ICE = "ice"

    @property
    def density(self) -> float:
        return density_for(self.value)

    @property
    def strength(self) -> float:
        return strength_for(self.value)


class TerrainType(str, Enum):
    LAND = "land"
    OCEAN = "ocean"
    SEDIMENTARY = "sedimentary"
    CRYSTALLINE = "crystalline"


def _value(x) -> str:
    return x.value if isinstance(x, Enum) else str(x)


def _fill_none(obj, defaults: dict) -> None:
    """Replace None fields of a frozen dataclass with the given defaults."""
    for name, default in defaults.items():
        if getattr(obj, name) is None:
            object.__setattr__(obj, name, default)


@dataclass(frozen=True)
class AsteroidPhysicalData:
    """
    diameter in km, velocity in km/s. Composition may be a Composition or any
    string; unrecognized names fall back to rock density.
    """
    diameter: float
    velocity: float
    composition: str = Composition.ROCK.value
    impact_probability: float = 0.0
    orbit: Optional[OrbitalElements] = None
    name: Optional[str] = None
    asteroid_id: Optional[str] = None
    hazardous: bool = False

    def __post_init__(self):
        _fill_none(self, {"composition": DEFAULT_COMPOSITION})
        object.__setattr__(self, "composition", _value(self.composition).lower())

    @property
    def label(self) -> str:
        return self.name or self.asteroid_id or "unknown"

    @property
    def density(self) -> float:
        return density_for(self.composition)

    @property
    def radius_m(self) -> float:
        return self.diameter * 500.0

    @property
    def mass(self) -> float:
        """kg, homogeneous sphere."""
        return self.density * sphere_volume(self.radius_m)


@dataclass(frozen=True)
class ImpactLocation:
    population_density: float = DEFAULT_POPULATION_DENSITY   # people / km^2
    distance_to_shore: float = DEFAULT_DISTANCE_TO_SHORE_KM   # km
    infrastructure: str = DEFAULT_INFRASTRUCTURE               # urban/suburban/rural/wilderness/ocean
    population: Optional[float] = None                         # affected people; None -> density * crater area
    coastal_terrain: Optional[str] = None                      # flat/coastal_plain/hilly/mountainous

    def __post_init__(self):
        _fill_none(self, {
            "population_density": DEFAULT_POPULATION_DENSITY,
            "distance_to_shore": DEFAULT_DISTANCE_TO_SHORE_KM,
            "infrastructure": DEFAULT_INFRASTRUCTURE,
        })


@dataclass(frozen=True)
class ImpactContext:
    terrain_type: str = DEFAULT_TERRAIN
    impact_angle: float = DEFAULT_IMPACT_ANGLE_DEG            # degrees, (0, 90]
    water_depth: float = DEFAULT_WATER_DEPTH                   # m
    location: ImpactLocation = field(default_factory=ImpactLocation)

    def __post_init__(self):
        _fill_none(self, {
            "terrain_type": DEFAULT_TERRAIN,
            "impact_angle": DEFAULT_IMPACT_ANGLE_DEG,
            "water_depth": DEFAULT_WATER_DEPTH,
            "location": ImpactLocation(),
        })
        object.__setattr__(self, "terrain_type", _value(self.terrain_type).lower())
