"""
Impact engine: runs the closed-form effect models for one asteroid striking
one site and collects them into an ImpactResult.

Order of evaluation:
- None diameter, velocity or probability take the threat-scoring defaults
- kinetic energy from diameter, velocity and composition density
- crater (angle, terrain), then seismic and atmospheric effects from energy
- tsunami only for ocean strikes deep enough to raise a wave
- climate from crater ejecta, then economics and casualties from crater size
- severity label and Torino-like rating
"""
import logging
from typing import Optional

from asteroid_threat.engine import risk_filter
from asteroid_threat.models.asteroid import AsteroidPhysicalData, ImpactContext, TerrainType
from asteroid_threat.models.results import ImpactResult
from asteroid_threat.physics import consequences, impact

logger = logging.getLogger(__name__)


class ImpactEngine:
    """
    Stateless apart from an optional default context applied when a call
    passes none.
    """
    def __init__(self, default_context: Optional[ImpactContext] = None):
        self.default_context = default_context or ImpactContext()

    def compute_impact(self, asteroid: AsteroidPhysicalData, context: Optional[ImpactContext] = None) -> ImpactResult:
        asteroid = risk_filter.with_defaults(asteroid)
        ctx = context or self.default_context
        location = ctx.location

        energy = impact.kinetic_energy(asteroid.diameter, asteroid.velocity, asteroid.composition)
        crater = impact.crater_formation(energy, ctx.impact_angle, ctx.terrain_type, asteroid.composition)
        seismic = impact.seismic_effects(energy, location)
        atmospheric = impact.atmospheric_effects(energy, asteroid.diameter)

        tsunami = None
        if ctx.terrain_type == TerrainType.OCEAN.value:
            tsunami = impact.tsunami_effects(energy, ctx.water_depth, location)

        climate = impact.climate_effects(energy, crater.ejecta_mass)
        economic = consequences.economic_impact(crater.final_diameter, location, climate.global_effects)
        casualties = consequences.casualties(crater.final_diameter, location)

        result = ImpactResult(
            energy=impact.energy_summary(energy),
            crater=crater,
            seismic=seismic,
            atmospheric=atmospheric,
            tsunami=tsunami,
            climate=climate,
            economic=economic,
            casualties=casualties,
            severity=consequences.assess_severity(energy, casualties.total),
            torino_scale=consequences.torino_rating(asteroid.diameter, asteroid.impact_probability, energy),
        )

        logger.info(
            "Impact %s: %.3g MT, crater %.2f km, severity=%s, torino=%d",
            asteroid.label,
            result.energy.megatons,
            crater.final_diameter,
            result.severity,
            result.torino_scale,
        )
        return result
