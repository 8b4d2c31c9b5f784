# asteroid_threat/main.py
import json
import logging
import math
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List

from asteroid_threat.cli import run_cli
from asteroid_threat.config import settings
from asteroid_threat.data.neo_records import load_records
from asteroid_threat.models.asteroid import AsteroidPhysicalData
from asteroid_threat.models.orbit import OrbitalElements
from asteroid_threat.pipeline.pipeline import run_assessment
from asteroid_threat.propagation.orbital_propagator import OrbitalPropagator

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")

DEMO_PROPAGATION_STEPS = 10
DEMO_STEP = 1.0

# Well-known objects with rough physical parameters, for runs without a records file.
DEMO_ASTEROIDS = [
    AsteroidPhysicalData(
        name="99942 Apophis", diameter=0.37, velocity=7.42, composition="stony",
        impact_probability=2.7e-6, hazardous=True,
        orbit=OrbitalElements(semi_major_axis=0.922, eccentricity=0.191,
                              inclination=math.radians(3.34), orbital_period=323.6),
    ),
    AsteroidPhysicalData(
        name="101955 Bennu", diameter=0.49, velocity=12.7, composition="carbonaceous",
        impact_probability=3.7e-4, hazardous=True,
        orbit=OrbitalElements(semi_major_axis=1.126, eccentricity=0.204,
                              inclination=math.radians(6.03), orbital_period=436.6),
    ),
    AsteroidPhysicalData(
        name="Chelyabinsk-class", diameter=0.02, velocity=19.0, composition="stony",
        impact_probability=1e-3,
    ),
    AsteroidPhysicalData(
        name="Chicxulub-class", diameter=10.0, velocity=20.0, composition="carbonaceous",
        impact_probability=1e-8,
    ),
]


def save_json(obj: Any, name_prefix: str) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out_dir = Path(settings.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    filename = out_dir / f"{name_prefix}_{ts}.json"
    with open(filename, "w") as f:
        json.dump(obj, f, indent=2, default=lambda o: repr(o))
    return str(filename)


def propagate_orbits(asteroids: List[AsteroidPhysicalData]) -> dict:
    """Track every asteroid that carries orbital elements for a few demo steps."""
    tracks = {}
    propagator = OrbitalPropagator()
    for index, a in enumerate(asteroids):
        if a.orbit is None:
            continue
        body_id = a.asteroid_id or a.label
        if body_id in tracks:
            body_id = f"{body_id}#{index}"
        track = tracks.setdefault(body_id, [])
        propagator.register_body(body_id, a.orbit, sink=lambda p, t=track: t.append(p.tolist()))

    for _ in range(DEMO_PROPAGATION_STEPS):
        propagator.advance(DEMO_STEP)
    return tracks


def summarize(report: dict) -> None:
    for item in report["assessments"]:
        impact = item["impact"]
        log.info(
            "%-20s level=%-12s energy=%.3g MT  crater=%.2f km  casualties=%s  loss=%s  torino=%d",
            item["asteroid"].label,
            item["threat_level"],
            impact.energy.megatons,
            impact.crater.final_diameter,
            f"{impact.casualties.total:,.0f}",
            impact.economic.total_text,
            impact.torino_scale,
        )

    plan = report["plan"]
    for entry in plan.timeline:
        log.info("  %d  %-20s -> %s ($%.0fM, p=%.2f)",
                 entry.year, entry.asteroid, entry.method, entry.cost, entry.success_probability)
    log.info(
        "Plan: %d threats mitigated (%.0f%%), cost $%.0fM, overall success %.1f%%",
        plan.threats_mitigated, plan.efficiency, plan.total_cost, plan.success_probability * 100.0,
    )


def main():
    try:
        records_path, context, budget, horizon = run_cli()

        if records_path:
            asteroids = load_records(records_path)
            log.info("Loaded %d asteroids from %s", len(asteroids), records_path)
        else:
            asteroids = list(DEMO_ASTEROIDS)
            log.info("Using built-in demo set (%d asteroids)", len(asteroids))

        report = run_assessment(asteroids, context, budget=budget, time_horizon=horizon)
        summarize(report)

        out = {
            "meta": {
                "budget_musd": budget,
                "time_horizon_years": horizon,
                "context": asdict(context),
                "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            },
            "assessments": [
                {
                    "asteroid": asdict(item["asteroid"]),
                    "threat_score": item["threat_score"],
                    "threat_level": item["threat_level"],
                    "impact": item["impact"].as_dict(),
                }
                for item in report["assessments"]
            ],
            "rejected": report["rejected"],
            "plan": report["plan"].as_dict(),
            "orbits": propagate_orbits([item["asteroid"] for item in report["assessments"]]),
        }
        out_file = save_json(out, settings.RUN_ID_PREFIX)
        log.info("Saved assessment: %s", out_file)

    except Exception:
        log.exception("Fatal exception during run")


if __name__ == "__main__":
    main()
