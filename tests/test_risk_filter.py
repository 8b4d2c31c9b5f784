import pytest

from asteroid_threat.engine.risk_filter import prioritize_threats, threat_level, threat_score, validate_asteroid
from asteroid_threat.models.asteroid import AsteroidPhysicalData


def _a(p, d, v, name=None, composition="rock"):
    return AsteroidPhysicalData(diameter=d, velocity=v, impact_probability=p, name=name, composition=composition)


def test_threat_score_formula():
    assert threat_score(_a(0.5, 2.0, 10.0)) == pytest.approx(0.5 * 4.0 * 100.0)


def test_missing_values_use_defaults():
    # diameter and velocity of 0 fall back to 0.1 km and 20 km/s
    assert threat_score(_a(1.0, 0.0, 0.0)) == pytest.approx(1.0 * 0.01 * 400.0)
    assert threat_score(_a(None, 1.0, 20.0)) == 0.0


@pytest.mark.parametrize("p, d, v, level", [
    (1.0, 1.0, 40.0, "CATASTROPHIC"),
    (1.0, 1.0, 20.0, "SEVERE"),
    (1.0, 0.2, 20.0, "HIGH"),
    (1.0, 0.1, 20.0, "MEDIUM"),
    (1.0, 0.5, 2.0, "LOW"),
    (0.0, 10.0, 70.0, "LOW"),
])
def test_threat_levels(p, d, v, level):
    assert threat_level(_a(p, d, v)) == level


def test_prioritize_is_descending_and_stable():
    threats = [
        _a(0.1, 1.0, 10.0, "first-tie"),
        _a(0.9, 1.0, 10.0, "top"),
        _a(0.1, 1.0, 10.0, "second-tie"),
        _a(0.0, 1.0, 10.0, "zero"),
    ]
    ordered = prioritize_threats(threats)
    assert [t.name for t in ordered] == ["top", "first-tie", "second-tie", "zero"]
    assert [t.name for t in threats][0] == "first-tie"


def test_prioritize_empty():
    assert prioritize_threats([]) == []
    assert prioritize_threats(None) == []


def test_validate_asteroid():
    ok = validate_asteroid(_a(0.1, 0.3, 15.0))
    assert ok == {"is_valid": True, "issues": []}

    bad = validate_asteroid(_a(0.1, -1.0, 0.0, composition=""))
    assert not bad["is_valid"]
    assert bad["issues"] == [
        "Invalid asteroid diameter",
        "Invalid asteroid velocity",
        "Unknown asteroid composition",
    ]


def test_validate_probability_range():
    assert "Impact probability outside [0, 1]" in validate_asteroid(_a(1.5, 0.3, 15.0))["issues"]
