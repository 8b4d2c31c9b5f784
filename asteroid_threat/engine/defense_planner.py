"""
Defense planner: scores deflection methods against an asteroid and builds a
budget-limited mitigation plan for a list of threats.

All times are years to impact, costs are millions USD.
"""
import dataclasses
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from asteroid_threat.config import settings
from asteroid_threat.engine import risk_filter
from asteroid_threat.models.asteroid import AsteroidPhysicalData
from asteroid_threat.models.defense_methods import DefenseMethod, list_methods
from asteroid_threat.models.results import DefensePlan, DeflectionResult, RiskAssessment, TimelineEntry
from asteroid_threat.physics import deflection
from asteroid_threat.physics.utils import format_distance

logger = logging.getLogger(__name__)


def recommendation(will_miss: bool, time_to_impact, method: DefenseMethod) -> str:
    if not will_miss:
        return "Combined approach required - no single method sufficient. Consider multiple kinetic impactors."

    readiness = f"({method.spec.technology_readiness}/10 readiness)"
    if time_to_impact > 15:
        return f"Gravity tractor recommended - most reliable for long timeframe {readiness}"
    if time_to_impact > 5:
        return f"Kinetic impactor recommended - proven technology {readiness}"
    if time_to_impact > 2:
        return f"Nuclear disruption necessary - limited time available {readiness}"
    return f"Emergency measures required - consider evacuation {readiness}"


def assess_risk(will_miss: bool, miss_distance) -> RiskAssessment:
    if not will_miss:
        return RiskAssessment("HIGH", "Impact likely - implement defense immediately")
    if miss_distance > settings.SAFE_MISS_DISTANCE:
        return RiskAssessment("LOW", "Asteroid will safely miss Earth")
    return RiskAssessment("MEDIUM", "Close approach - continue monitoring")


def allocate_resources(total_cost, budget) -> dict:
    """Split total_cost into fixed buckets; scaled down to fit when over budget."""
    allocation = {k: total_cost * share for k, share in settings.RESOURCE_BUCKETS.items()}
    if total_cost > budget and total_cost > 0:
        scale = budget / total_cost
        allocation = {k: v * scale for k, v in allocation.items()}
    return allocation


class DefensePlanner:
    """
    Stateless evaluator over the fixed DefenseMethod catalog.
    start_year anchors the plan timeline; None means the current UTC year.
    """
    def __init__(self, start_year: Optional[int] = None):
        self.start_year = start_year

    # ---------- catalog ----------
    def list_methods(self) -> list:
        return list_methods()

    def method_details(self, method_id: Union[DefenseMethod, str]) -> Optional[dict]:
        """Catalog entry as a dict, or None for an id outside the catalog."""
        try:
            method = DefenseMethod.lookup(method_id)
        except ValueError:
            return None
        return {"id": method.name, **dataclasses.asdict(method.spec)}

    def validate_asteroid(self, asteroid) -> dict:
        return risk_filter.validate_asteroid(asteroid)

    # ---------- single method ----------
    def evaluate_deflection(self, asteroid: AsteroidPhysicalData, method_id, time_to_impact) -> DeflectionResult:
        method = DefenseMethod.lookup(method_id)
        spec = method.spec
        asteroid = risk_filter.with_defaults(asteroid)

        required = deflection.required_delta_v(time_to_impact)
        achievable = deflection.achievable_delta_v(method, asteroid.mass, time_to_impact)
        will_miss = achievable >= required
        miss = deflection.miss_distance(achievable, time_to_impact)

        result = DeflectionResult(
            method_id=method.name,
            method=spec.name,
            description=spec.description,
            required_delta_v=required,
            achievable_delta_v=achievable,
            success_probability=deflection.success_probability(method, time_to_impact),
            will_miss=will_miss,
            miss_distance=miss,
            miss_distance_text=format_distance(miss),
            development_time=spec.development_time,
            cost=spec.cost,
            technology_readiness=spec.technology_readiness,
            recommendation=recommendation(will_miss, time_to_impact, method),
            risk=assess_risk(will_miss, miss),
        )
        logger.debug(
            "%s vs %s (%.1f y): dv %.3g/%.3g m/s, miss=%s",
            method.name, asteroid.label, time_to_impact, achievable, required, will_miss,
        )
        return result

    def method_score(self, asteroid: AsteroidPhysicalData, method: DefenseMethod, time_to_impact) -> float:
        """success * (1 if the method alone deflects, else penalty) * TRL/10."""
        result = self.evaluate_deflection(asteroid, method, time_to_impact)
        sufficient = 1.0 if result.will_miss else settings.INSUFFICIENT_METHOD_PENALTY
        return result.success_probability * sufficient * (method.spec.technology_readiness / 10.0)

    def select_best_method(self, asteroid: AsteroidPhysicalData, time_to_impact, available_budget) -> Optional[DefenseMethod]:
        """Highest-scoring affordable method; ties keep the earlier catalog entry."""
        best, best_score = None, -1.0
        for method in DefenseMethod:
            if method.spec.cost > available_budget:
                continue
            score = self.method_score(asteroid, method, time_to_impact)
            if score > best_score:
                best, best_score = method, score
        return best

    # ---------- plan ----------
    def plan_defense(self, threats: Iterable[AsteroidPhysicalData], budget, time_horizon) -> DefensePlan:
        threats = [risk_filter.with_defaults(t) for t in (threats or [])]
        ordered = risk_filter.prioritize_threats(threats)
        start_year = self.start_year if self.start_year is not None else datetime.now(timezone.utc).year

        timeline = []
        total_cost = 0.0
        remaining = budget

        for index, threat in enumerate(ordered):
            if not remaining > 0:
                break
            method = self.select_best_method(threat, time_horizon, remaining)
            if method is None:
                continue
            cost = method.spec.cost
            if cost > remaining:
                continue

            result = self.evaluate_deflection(threat, method, time_horizon)
            timeline.append(TimelineEntry(
                year=start_year + index,
                asteroid=threat.label,
                method=method.name,
                cost=cost,
                success_probability=result.success_probability,
                threat_level=risk_filter.threat_level(threat),
                threat_score=risk_filter.threat_score(threat),
            ))
            total_cost += cost
            remaining -= cost

        overall = 0.0
        if timeline:
            overall = 1.0
            for entry in timeline:
                overall *= entry.success_probability

        mitigated = len(timeline)
        efficiency = mitigated / len(threats) * 100.0 if threats else 0.0

        plan = DefensePlan(
            timeline=tuple(timeline),
            budget=budget,
            total_cost=total_cost,
            remaining_budget=remaining,
            threats_mitigated=mitigated,
            success_probability=overall,
            efficiency=efficiency,
            resource_allocation=allocate_resources(total_cost, budget),
        )
        logger.info(
            "Defense plan: %d/%d threats mitigated, cost $%.0fM of $%.0fM, success=%.3f",
            mitigated, len(threats), total_cost, budget, overall,
        )
        return plan
