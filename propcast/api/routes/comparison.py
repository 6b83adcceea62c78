"""Scenario comparison routes."""

from fastapi import APIRouter, HTTPException

from propcast.api.schemas import (
    ComparisonRequest,
    ComparisonResponse,
    ScenarioMetricsResponse,
)
from propcast.engine.assumptions_builder import build_assumptions
from propcast.engine.comparison import compare_scenarios

router = APIRouter(prefix="/api/v1/comparison", tags=["comparison"])


@router.post("/run", response_model=ComparisonResponse)
async def run_comparison(req: ComparisonRequest):
    """Run every scenario independently and rank them by total ROI."""
    scenarios = []
    warnings: list[str] = []
    try:
        for s in req.scenarios:
            assumptions, scenario_warnings = build_assumptions(s.assumptions)
            scenarios.append((s.name, assumptions))
            warnings.extend(f"{s.name}: {w}" for w in scenario_warnings)
        result = compare_scenarios(scenarios)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ComparisonResponse(
        scenarios=[
            ScenarioMetricsResponse(
                name=m.name,
                rental_yield=m.rental_yield,
                lvr=m.lvr,
                interest_rate=m.interest_rate,
                total_roi=m.total_roi,
                annualized_roi=m.annualized_roi,
                average_annual_cash_flow=m.average_annual_cash_flow,
                total_cumulative_cash_flow=m.total_cumulative_cash_flow,
                cash_flow_volatility=m.cash_flow_volatility,
                break_even_year=m.break_even_year,
                risk_score=m.risk_score,
                risk_level=m.risk_level,
            )
            for m in result.scenarios
        ],
        best_performing=result.best_performing,
        worst_performing=result.worst_performing,
        average_roi=result.average_roi,
        top_by_roi=result.top_by_roi,
        top_by_cash_flow=result.top_by_cash_flow,
        top_risk_adjusted=result.top_risk_adjusted,
        risk_distribution=result.risk_distribution,
        roi_min=result.roi_min,
        roi_max=result.roi_max,
        roi_median=result.roi_median,
        roi_standard_deviation=result.roi_standard_deviation,
        warnings=warnings,
    )
