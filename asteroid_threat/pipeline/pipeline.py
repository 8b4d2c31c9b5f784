import logging
from typing import Iterable, Optional

from asteroid_threat.engine.defense_planner import DefensePlanner
from asteroid_threat.engine.impact_engine import ImpactEngine
from asteroid_threat.engine.risk_filter import prioritize_threats, threat_level, threat_score, validate_asteroid
from asteroid_threat.models.asteroid import AsteroidPhysicalData, ImpactContext

logger = logging.getLogger(__name__)


def run_assessment(
    asteroids: Iterable[AsteroidPhysicalData],
    context: Optional[ImpactContext] = None,
    budget: float = 5000.0,
    time_horizon: float = 10.0,
    start_year: Optional[int] = None,
) -> dict:
    """
    Batch assessment:
      1) validate records, keep the usable ones
      2) rank by threat score
      3) impact effects per asteroid at the shared impact site
      4) one defense plan for the whole batch
    """
    impact_engine = ImpactEngine(context)
    planner = DefensePlanner(start_year=start_year)

    # Stage 1: validation
    valid, rejected = [], []
    for a in asteroids:
        check = validate_asteroid(a)
        if check["is_valid"]:
            valid.append(a)
        else:
            logger.warning("Rejecting %s: %s", getattr(a, "label", a), "; ".join(check["issues"]))
            rejected.append({"asteroid": getattr(a, "label", repr(a)), "issues": check["issues"]})

    # Stage 2: ranking
    ranked = prioritize_threats(valid)

    # Stage 3: impact effects
    assessments = []
    for a in ranked:
        result = impact_engine.compute_impact(a)
        assessments.append({
            "asteroid": a,
            "threat_score": threat_score(a),
            "threat_level": threat_level(a),
            "impact": result,
        })

    # Stage 4: defense plan
    plan = planner.plan_defense(ranked, budget, time_horizon)

    logger.info("Assessed %d asteroids (%d rejected)", len(assessments), len(rejected))
    return {"assessments": assessments, "rejected": rejected, "plan": plan}
