import math

import pytest

from asteroid_threat.config import settings
from asteroid_threat.engine.impact_engine import ImpactEngine
from asteroid_threat.models.asteroid import AsteroidPhysicalData, ImpactContext, ImpactLocation
from asteroid_threat.physics import consequences, impact


def test_energy_reference_case():
    """
    1 km stony body at 20 km/s:
    m = 3000 * 4/3 pi 500^3 = 5e11 pi kg, E = 1/2 m (2e4)^2 = pi * 1e20 J
    """
    assert impact.kinetic_energy(1.0, 20.0, "stony") == pytest.approx(math.pi * 1e20, rel=1e-12)


def test_energy_scales_with_velocity_squared_and_diameter_cubed():
    base = impact.kinetic_energy(0.5, 15.0, "iron")
    assert impact.kinetic_energy(0.5, 30.0, "iron") == pytest.approx(4.0 * base)
    assert impact.kinetic_energy(1.0, 15.0, "iron") == pytest.approx(8.0 * base)


def test_unknown_composition_uses_rock_density():
    assert impact.kinetic_energy(1.0, 20.0, "unobtainium") == impact.kinetic_energy(1.0, 20.0, "rock")


def test_energy_equivalents():
    summary = impact.energy_summary(settings.MEGATON_J * 10)
    assert summary.megatons == pytest.approx(10.0)
    assert summary.kilotons == pytest.approx(10000.0)
    assert impact.energy_equivalent(settings.HIROSHIMA_J / 2) == "0.50 Hiroshima bombs"
    assert impact.energy_equivalent(settings.MEGATON_J * 100) == "2.0 Tsar Bomba equivalents"


def test_crater_grows_with_energy():
    small = impact.crater_formation(1e16, 45.0)
    large = impact.crater_formation(1e20, 45.0)
    assert large.final_diameter > small.final_diameter
    assert large.ejecta_mass > small.ejecta_mass


def _transition_energy(angle):
    """Energy (J) whose transient crater sits exactly on the simple/complex threshold."""
    angle_factor = math.sin(math.radians(angle)) ** 0.5
    energy_tj = (settings.CRATER_COMPLEX_THRESHOLD_KM / (settings.CRATER_COEFF * angle_factor)) ** (1.0 / settings.CRATER_ENERGY_EXPONENT)
    return energy_tj * settings.TERAJOULE_J


@pytest.mark.parametrize("terrain", ["land", "ocean", "sedimentary", "crystalline"])
@pytest.mark.parametrize("angle", [15.0, 45.0, 90.0])
def test_crater_diameter_never_shrinks_as_energy_grows(terrain, angle):
    edge = _transition_energy(angle)
    energies = [10.0 ** (10.0 + k * 0.05) for k in range(301)]
    energies += [edge * (1.0 + f) for f in (-1e-3, -1e-9, 0.0, 1e-9, 1e-3)]
    energies.sort()

    diameters = [impact.crater_formation(e, angle, terrain).final_diameter for e in energies]
    assert all(b >= a for a, b in zip(diameters, diameters[1:]))
    # the sweep crosses the collapse regime
    assert diameters[0] < settings.CRATER_COMPLEX_THRESHOLD_KM * 0.3
    assert impact.crater_formation(energies[-1], angle, terrain).crater_type == "Complex Crater"


def test_crater_type_and_oblique_impacts():
    assert impact.crater_formation(1e12, 90.0).crater_type == "Simple Crater"
    assert impact.crater_formation(1e22, 90.0).crater_type == "Complex Crater"
    assert impact.crater_formation(1e18, 15.0).transient_diameter < impact.crater_formation(1e18, 90.0).transient_diameter


def test_ocean_target_shrinks_crater():
    land = impact.crater_formation(1e18, 45.0, "land")
    ocean = impact.crater_formation(1e18, 45.0, "ocean")
    assert ocean.final_diameter == pytest.approx(land.final_diameter * 0.3)


def test_seismic_intensity_floor_and_nan():
    assert impact.seismic_intensity(0.0, 1000.0) == 1.0
    assert math.isnan(impact.seismic_intensity(float("nan"), 100.0))
    assert impact.intensity_description(10.7) == "Catastrophic"
    assert impact.intensity_description(11.0) == "Unknown"
    assert impact.intensity_description(float("inf")) == "Unknown"
    assert impact.intensity_description(6.4) == "Very strong"
    assert impact.intensity_description(float("nan")) == "Unknown"


def test_seismic_radii_invert_attenuation():
    magnitude = 8.0
    radius = impact.radius_for_intensity(magnitude, settings.SEISMIC_DAMAGE_INTENSITY)
    assert impact.seismic_intensity(magnitude, radius) == pytest.approx(settings.SEISMIC_DAMAGE_INTENSITY)
    fx = impact.seismic_effects(1e20)
    assert fx.felt_radius_km > fx.damage_radius_km
    assert fx.felt_arrival_s == pytest.approx(fx.felt_radius_km / 5.0)


def test_airburst_only_above_minimum_size():
    assert impact.atmospheric_effects(1e15, 0.05).airburst_height_km is None
    big = impact.atmospheric_effects(1e18, 0.5)
    assert big.airburst
    assert big.airburst_height_km > 0
    assert big.overpressure_5psi_km > big.overpressure_20psi_km


def test_tsunami_needs_deep_water():
    assert impact.tsunami_effects(1e20, 50.0) is None
    wave = impact.tsunami_effects(1e20, 4000.0, ImpactLocation(distance_to_shore=100.0))
    assert wave.coastal_height < wave.initial_height
    assert wave.warning_time_min == pytest.approx(100000.0 / math.sqrt(9.81 * 4000.0) / 60.0)


def test_affected_coastline_chord():
    # reach = 1000 km * ln(e^2) = 2000 km; chord at 1200 km = 2 * sqrt(2000^2 - 1200^2)
    assert impact.affected_coastline(math.e ** 2, 1200.0) == pytest.approx(3200.0)
    assert impact.affected_coastline(0.5, 10.0) == 0.0


def test_climate_duration_is_capped():
    climate = impact.climate_effects(1e24, 1e20)
    assert climate.duration_years == settings.CLIMATE_MAX_DURATION_YEARS
    assert climate.global_effects
    assert climate.agricultural_impact == "GLOBAL FAMINE RISK"


def test_negative_diameter_propagates_nan():
    energy = impact.kinetic_energy(-1.0, 20.0)
    assert energy < 0
    assert math.isnan(impact.seismic_magnitude(energy))
    assert math.isnan(impact.crater_formation(energy, 45.0).final_diameter)


def test_severity_ladder():
    assert consequences.assess_severity(0.0, 0) == "LOCALIZED"
    assert consequences.assess_severity(0.0, 2e3) == "SIGNIFICANT"
    assert consequences.assess_severity(settings.MEGATON_J * 2e6, 0) == "EXTINCTION LEVEL"
    assert consequences.assess_severity(settings.MEGATON_J * 500, 0) == "MAJOR DISASTER"


@pytest.mark.parametrize("probability, megatons, expected", [
    (1e-5, 1e6, 0),
    (0.5, 0.05, 1),
    (0.001, 5.0, 2),
    (0.02, 5.0, 3),
    (0.001, 50.0, 4),
    (0.5, 50.0, 5),
    (0.001, 500.0, 6),
    (0.5, 500.0, 7),
    (0.001, 5000.0, 8),
    (0.5, 5000.0, 9),
])
def test_torino_rating(probability, megatons, expected):
    assert consequences.torino_rating(0.1, probability, megatons * settings.MEGATON_J) == expected


def test_casualty_rings():
    loc = ImpactLocation(population_density=100.0)
    out = consequences.casualties(1.0, loc)
    # immediate = pi * 3^2 * 100
    assert out.immediate == float(math.floor(math.pi * 900.0 + 0.5))
    assert out.severe_injuries > 0
    assert out.total >= out.immediate


def test_economic_global_component():
    local = consequences.economic_impact(10.0, global_effects=False)
    world = consequences.economic_impact(10.0, global_effects=True)
    assert world.global_impact == settings.GLOBAL_ECONOMIC_IMPACT
    assert world.total > local.total
    assert world.total_text.startswith("$")


def test_compute_impact_on_land_has_no_tsunami():
    engine = ImpactEngine()
    result = engine.compute_impact(AsteroidPhysicalData(diameter=1.0, velocity=20.0, composition="stony",
                                                        impact_probability=0.5))
    assert result.tsunami is None
    assert result.energy.joules == pytest.approx(math.pi * 1e20)
    assert result.torino_scale == 9
    assert result.severity in {label for _, _, label in consequences.SEVERITY_LADDER}
    assert result.as_dict()["crater"]["crater_type"] in ("Simple Crater", "Complex Crater")


def test_compute_impact_in_ocean_has_tsunami():
    ctx = ImpactContext(terrain_type="ocean", water_depth=4000.0,
                        location=ImpactLocation(infrastructure="ocean", coastal_terrain="flat"))
    result = ImpactEngine().compute_impact(AsteroidPhysicalData(diameter=0.5, velocity=18.0), ctx)
    assert result.tsunami is not None
    assert result.tsunami.inundation_distance_km == pytest.approx(result.tsunami.coastal_height / 0.001 / 1000.0)


def test_shallow_ocean_has_no_tsunami():
    ctx = ImpactContext(terrain_type="ocean", water_depth=20.0)
    assert ImpactEngine().compute_impact(AsteroidPhysicalData(diameter=0.5, velocity=18.0), ctx).tsunami is None


def test_compute_impact_fills_missing_asteroid_values():
    engine = ImpactEngine()
    no_probability = engine.compute_impact(AsteroidPhysicalData(diameter=0.5, velocity=18.0, impact_probability=None))
    zero_probability = engine.compute_impact(AsteroidPhysicalData(diameter=0.5, velocity=18.0, impact_probability=0.0))
    assert no_probability.torino_scale == zero_probability.torino_scale

    bare = engine.compute_impact(AsteroidPhysicalData(diameter=None, velocity=None, composition=None))
    expected = impact.kinetic_energy(settings.THREAT_DEFAULT_DIAMETER_KM, settings.THREAT_DEFAULT_VELOCITY_KM_S, "rock")
    assert bare.energy.joules == pytest.approx(expected)


def test_none_context_fields_take_defaults():
    loc = ImpactLocation(population_density=None, distance_to_shore=None, infrastructure=None)
    ctx = ImpactContext(terrain_type=None, impact_angle=None, water_depth=None, location=loc)
    assert ctx.terrain_type == settings.DEFAULT_TERRAIN
    assert ctx.impact_angle == settings.DEFAULT_IMPACT_ANGLE_DEG
    assert ctx.water_depth == settings.DEFAULT_WATER_DEPTH
    assert loc.population_density == settings.DEFAULT_POPULATION_DENSITY
    assert loc.distance_to_shore == settings.DEFAULT_DISTANCE_TO_SHORE_KM
    assert loc.infrastructure == settings.DEFAULT_INFRASTRUCTURE
    assert ImpactContext(location=None).location == ImpactLocation()


def test_ocean_strike_with_missing_depth_and_angle():
    ctx = ImpactContext(terrain_type="ocean", impact_angle=None, water_depth=None,
                        location=ImpactLocation(population_density=None, distance_to_shore=None))
    result = ImpactEngine().compute_impact(AsteroidPhysicalData(diameter=0.5, velocity=18.0), ctx)
    # depth falls back to 0 m, too shallow for a wave
    assert result.tsunami is None
    assert result.crater.final_diameter > 0
    assert result.casualties.total >= 0
