import json
import math

import pytest

from asteroid_threat.data.neo_records import (
    asteroid_from_neo,
    asteroids_from_feed,
    estimate_composition,
    estimate_impact_probability,
    load_records,
    orbit_from_neo,
)


def _neo(**overrides):
    rec = {
        "id": 2000433,
        "name": "433 Eros (A898 PA)",
        "absolute_magnitude_h": 19.0,
        "is_potentially_hazardous_asteroid": True,
        "spectral_type": "Sq",
        "estimated_diameter": {
            "kilometers": {"estimated_diameter_min": 0.1, "estimated_diameter_max": 0.3},
        },
        "close_approach_data": [
            {"relative_velocity": {"kilometers_per_second": "12.5"}},
        ],
    }
    rec.update(overrides)
    return rec


def test_asteroid_from_neo_maps_fields():
    a = asteroid_from_neo(_neo())
    assert a.diameter == pytest.approx(0.2)
    assert a.velocity == pytest.approx(12.5)
    assert a.composition == "stony"
    assert a.impact_probability == 1e-5
    assert a.asteroid_id == "2000433"
    assert a.hazardous
    assert a.orbit is None


def test_bare_record_uses_defaults():
    a = asteroid_from_neo({})
    assert a.diameter == 0.5
    assert a.velocity == 20.0
    assert a.composition == "carbonaceous"
    assert a.impact_probability == 1e-7
    assert a.label == "unknown"


@pytest.mark.parametrize("record, expected", [
    ({"spectral_type": "C"}, "carbonaceous"),
    ({"spectral_type": "M"}, "metal"),
    ({"albedo": 0.05}, "carbonaceous"),
    ({"albedo": 0.3}, "metal"),
    ({"albedo": 0.15}, "carbonaceous"),
])
def test_estimate_composition(record, expected):
    assert estimate_composition(record) == expected


@pytest.mark.parametrize("hazardous, magnitude, expected", [
    (False, 10.0, 1e-7),
    (True, None, 1e-6),
    (True, 21.0, 1e-6),
    (True, 19.5, 1e-5),
    (True, 17.0, 1e-4),
])
def test_impact_probability_prior(hazardous, magnitude, expected):
    rec = {"is_potentially_hazardous_asteroid": hazardous, "absolute_magnitude_h": magnitude}
    assert estimate_impact_probability(rec) == expected


def test_orbital_data_becomes_elements():
    el = orbit_from_neo({
        "semi_major_axis": "1.458",
        "eccentricity": "0.0",
        "inclination": "10.8",
        "ascending_node_longitude": "304.3",
        "perihelion_argument": "178.9",
        "mean_anomaly": "90.0",
        "orbital_period": "643.1",
    })
    assert el.semi_major_axis == pytest.approx(1.458)
    assert el.inclination == pytest.approx(math.radians(10.8))
    # circular orbit: true anomaly equals mean anomaly
    assert el.true_anomaly == pytest.approx(math.pi / 2)
    assert el.orbital_period == pytest.approx(643.1)


def test_open_or_incomplete_orbits_are_dropped():
    assert orbit_from_neo({"semi_major_axis": "1.0", "eccentricity": "1.2", "orbital_period": "300"}) is None
    assert orbit_from_neo({"semi_major_axis": "1.0"}) is None
    assert orbit_from_neo(None) is None


def test_feed_is_flattened_and_bad_records_skipped():
    payload = {
        "near_earth_objects": {
            "2024-01-01": [_neo(name="one")],
            "2024-01-02": [_neo(name="two"), "not-a-record"],
        }
    }
    out = asteroids_from_feed(payload)
    assert [a.name for a in out] == ["one", "two"]


def test_browse_payload_list():
    out = asteroids_from_feed({"near_earth_objects": [_neo(name="x")]})
    assert len(out) == 1


def test_load_records_from_file(tmp_path):
    path = tmp_path / "neos.json"
    path.write_text(json.dumps([_neo(name="a"), _neo(name="b", spectral_type="C")]), encoding="utf-8")
    out = load_records(path)
    assert [a.composition for a in out] == ["stony", "carbonaceous"]

    single = tmp_path / "one.json"
    single.write_text(json.dumps(_neo(name="solo")), encoding="utf-8")
    assert load_records(single)[0].name == "solo"
