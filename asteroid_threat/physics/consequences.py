# asteroid_threat/physics/consequences.py

from typing import Optional

from asteroid_threat.config import settings
from asteroid_threat.models.asteroid import ImpactLocation
from asteroid_threat.models.results import CasualtyResult, EconomicResult
from asteroid_threat.physics.utils import circle_area, format_currency, round_half_up


def population_in_radius(location: ImpactLocation, radius_km):
    return circle_area(radius_km) * location.population_density


def infrastructure_density(location: ImpactLocation):
    """$M per km^2 for the location's infrastructure class."""
    return settings.INFRASTRUCTURE_DENSITY_MUSD.get(
        str(location.infrastructure).lower(), settings.DEFAULT_INFRASTRUCTURE_DENSITY_MUSD
    )


def casualty_costs(population):
    return population * (settings.VALUE_OF_LIFE * 0.1 + settings.INJURY_COST * 0.3)


def economic_impact(crater_diameter, location: Optional[ImpactLocation] = None, global_effects=False) -> EconomicResult:
    location = location or ImpactLocation()
    area = circle_area(crater_diameter / 2.0)

    infrastructure = area * infrastructure_density(location) * 1e6

    population = location.population
    if population is None:
        population = area * location.population_density
    casualties = casualty_costs(population)

    agriculture = area * (settings.AGRICULTURE_LOSS_GLOBAL if global_effects else settings.AGRICULTURE_LOSS_LOCAL)
    global_impact = settings.GLOBAL_ECONOMIC_IMPACT if global_effects else 0.0

    total = infrastructure + casualties + agriculture + global_impact
    return EconomicResult(
        infrastructure=infrastructure,
        casualties=casualties,
        agriculture=agriculture,
        global_impact=global_impact,
        total=total,
        gdp_impact_percent=total / settings.WORLD_GDP * 100.0,
        total_text=format_currency(total),
    )


def casualties(crater_diameter, location: Optional[ImpactLocation] = None) -> CasualtyResult:
    """
    Concentric rings at 3x, 10x and 50x the crater diameter.
    Inner ring is lethal, the next two count as severe / moderate injuries.
    """
    location = location or ImpactLocation()

    immediate = population_in_radius(location, crater_diameter * settings.CASUALTY_RING_IMMEDIATE)
    severe = population_in_radius(location, crater_diameter * settings.CASUALTY_RING_SEVERE) - immediate
    moderate = (
        population_in_radius(location, crater_diameter * settings.CASUALTY_RING_MODERATE)
        - severe
        - immediate
    )
    long_term = (immediate + severe) * settings.LONG_TERM_RATE

    return CasualtyResult(
        immediate=round_half_up(immediate),
        severe_injuries=round_half_up(severe * settings.SEVERE_INJURY_RATE),
        moderate_injuries=round_half_up(moderate * settings.MODERATE_INJURY_RATE),
        long_term=round_half_up(long_term),
        total=round_half_up(immediate + severe * settings.SEVERE_INJURY_RATE + long_term),
    )


# (energy MT, casualties, label), highest first; either trigger is enough
SEVERITY_LADDER = (
    (1e6, 1e9, "EXTINCTION LEVEL"),
    (1e5, 1e8, "GLOBAL CATASTROPHE"),
    (1e4, 1e7, "CIVILIZATION THREAT"),
    (1e3, 1e6, "REGIONAL CATASTROPHE"),
    (1e2, 1e5, "MAJOR DISASTER"),
    (1e1, 1e4, "DISASTER"),
    (1e0, 1e3, "SIGNIFICANT"),
)


def assess_severity(energy, casualty_count):
    energy_mt = energy / settings.MEGATON_J
    for mt, people, label in SEVERITY_LADDER:
        if energy_mt > mt or casualty_count > people:
            return label
    return "LOCALIZED"


def torino_rating(diameter, probability, energy):
    """
    Torino-like 0-9 rating. Energy breakpoints 0.1/10/100/1000 MT; within a band
    the higher value applies when probability > 0.01. diameter is not used by
    the thresholds but kept in the signature.
    """
    energy_mt = energy / settings.MEGATON_J

    if probability < 0.0001:
        return 0
    if energy_mt < 0.1:
        return 1
    likely = probability > 0.01
    if energy_mt < 10:
        return 3 if likely else 2
    if energy_mt < 100:
        return 5 if likely else 4
    if energy_mt < 1000:
        return 7 if likely else 6
    return 9 if likely else 8
