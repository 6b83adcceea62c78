"""Scenario comparison: run each scenario independently and rank the results.

Pure functions. No I/O. Each scenario gets its own engine run; nothing is
shared between runs.
"""

from decimal import Decimal, ROUND_HALF_UP

from propcast.engine.cashflow import annual_rent, rental_yield
from propcast.engine.projection import run_projection
from propcast.engine.summary import find_year
from propcast.models.assumptions import ProjectionAssumptions
from propcast.models.results import ComparisonResult, ScenarioMetrics, YearProjection

FOUR_PLACES = Decimal("0.0001")
TOP_N = 3


def _population_std(values: list[Decimal]) -> Decimal:
    if not values:
        return Decimal("0")
    mean = sum(values, Decimal("0")) / len(values)
    variance = sum(((v - mean) ** 2 for v in values), Decimal("0")) / len(values)
    return variance.sqrt()


def _median(values: list[Decimal]) -> Decimal:
    """Upper median, matching how the comparison table picks its middle value."""
    if not values:
        return Decimal("0")
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def first_positive_cumulative_year(projections: list[YearProjection]) -> int:
    """Year the cumulative cash flow first turns positive; 0 if it never does."""
    for p in projections:
        if p.year >= 1 and p.cumulative_cash_flow > 0:
            return p.year
    return 0


def risk_score(
    lvr: Decimal,
    cash_flow_volatility: Decimal,
    break_even: int,
    interest_rate: Decimal,
) -> Decimal:
    """Weighted risk score clamped to 0-100."""
    score = (
        lvr * Decimal("0.3")
        + cash_flow_volatility * Decimal("0.2")
        + Decimal(break_even) * Decimal("0.3")
        + interest_rate * Decimal("0.2")
    )
    return max(Decimal("0"), min(Decimal("100"), score))


def risk_level(score: Decimal) -> str:
    if score < 30:
        return "Low"
    if score < 70:
        return "Medium"
    return "High"


def scenario_metrics(name: str, assumptions: ProjectionAssumptions) -> ScenarioMetrics:
    """Run one scenario and derive its headline metrics."""
    projections = run_projection(assumptions)
    operating = [p for p in projections if p.year >= 1]
    if not operating:
        return ScenarioMetrics(name=name, projections=projections)

    year_1 = find_year(projections, 1)
    final = operating[-1]

    total_roi = Decimal("0")
    annualized_roi = Decimal("0")
    if year_1 is not None and year_1.property_value > 0:
        ratio = final.property_equity / year_1.property_value
        total_roi = (ratio * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)
        if ratio > 0:
            annualized_roi = Decimal(str(float(ratio) ** (1 / final.year) - 1)).quantize(
                FOUR_PLACES, ROUND_HALF_UP
            )

    cash_flows = [p.after_tax_cash_flow for p in projections]
    volatility = _population_std(cash_flows)
    average_cash_flow = sum(cash_flows, Decimal("0")) / len(cash_flows)
    break_even = first_positive_cumulative_year(projections)
    lvr = assumptions.lvr
    rate = assumptions.main_loan.annual_rate_percent
    score = risk_score(lvr, volatility, break_even, rate)

    return ScenarioMetrics(
        name=name,
        projections=projections,
        initial_property_value=assumptions.initial_property_value,
        annual_rent=annual_rent(assumptions),
        rental_yield=rental_yield(assumptions).quantize(FOUR_PLACES, ROUND_HALF_UP),
        lvr=lvr.quantize(FOUR_PLACES, ROUND_HALF_UP),
        interest_rate=rate,
        total_roi=total_roi,
        annualized_roi=annualized_roi,
        average_annual_cash_flow=average_cash_flow.quantize(FOUR_PLACES, ROUND_HALF_UP),
        total_cumulative_cash_flow=projections[-1].cumulative_cash_flow,
        cash_flow_volatility=volatility.quantize(FOUR_PLACES, ROUND_HALF_UP),
        break_even_year=break_even,
        risk_score=score.quantize(FOUR_PLACES, ROUND_HALF_UP),
        risk_level=risk_level(score),
    )


def _risk_adjusted(metrics: ScenarioMetrics) -> Decimal:
    if metrics.risk_score == 0:
        return metrics.total_roi
    return metrics.total_roi / metrics.risk_score


def compare_scenarios(
    scenarios: list[tuple[str, ProjectionAssumptions]],
) -> ComparisonResult:
    """Evaluate every scenario and rank them by total ROI."""
    if not scenarios:
        return ComparisonResult()

    evaluated = [scenario_metrics(name, a) for name, a in scenarios]
    ranked = sorted(evaluated, key=lambda m: m.total_roi, reverse=True)
    roi_values = [m.total_roi for m in evaluated]

    distribution = {"low": 0, "medium": 0, "high": 0}
    for m in evaluated:
        distribution[m.risk_level.lower()] += 1

    by_cash_flow = sorted(evaluated, key=lambda m: m.average_annual_cash_flow, reverse=True)
    by_risk_adjusted = sorted(evaluated, key=_risk_adjusted, reverse=True)

    return ComparisonResult(
        scenarios=ranked,
        best_performing=ranked[0].name,
        worst_performing=ranked[-1].name,
        average_roi=(sum(roi_values, Decimal("0")) / len(roi_values)).quantize(
            FOUR_PLACES, ROUND_HALF_UP
        ),
        top_by_roi=[m.name for m in ranked[:TOP_N]],
        top_by_cash_flow=[m.name for m in by_cash_flow[:TOP_N]],
        top_risk_adjusted=[m.name for m in by_risk_adjusted[:TOP_N]],
        risk_distribution=distribution,
        roi_min=min(roi_values),
        roi_max=max(roi_values),
        roi_median=_median(roi_values),
        roi_standard_deviation=_population_std(roi_values).quantize(FOUR_PLACES, ROUND_HALF_UP),
    )
