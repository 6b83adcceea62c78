"""Projection routes: assumptions in, year-by-year series and summary out."""

import logging

from fastapi import APIRouter, HTTPException

from propcast.api.schemas import (
    ProjectionRequest,
    ProjectionResponse,
    SummaryResponse,
    YearProjectionResponse,
)
from propcast.config import settings
from propcast.engine.assumptions_builder import build_assumptions
from propcast.engine.projection import run_projection
from propcast.engine.summary import clamp_year_range, slice_years, summarize
from propcast.models.results import ProjectionSummary, YearProjection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["projections"])


def _year_to_response(p: YearProjection) -> YearProjectionResponse:
    return YearProjectionResponse(
        year=p.year,
        rental_income=p.rental_income,
        property_value=p.property_value,
        main_loan_balance=p.main_loan_balance,
        equity_loan_balance=p.equity_loan_balance,
        total_interest=p.total_interest,
        main_loan_payment=p.main_loan_payment,
        equity_loan_payment=p.equity_loan_payment,
        main_interest_year=p.main_interest_year,
        equity_interest_year=p.equity_interest_year,
        main_loan_status=p.main_loan_status.value,
        equity_loan_status=p.equity_loan_status.value,
        other_expenses=p.other_expenses,
        depreciation=p.depreciation,
        taxable_income=p.taxable_income,
        tax_benefit=p.tax_benefit,
        after_tax_cash_flow=p.after_tax_cash_flow,
        cumulative_cash_flow=p.cumulative_cash_flow,
        property_equity=p.property_equity,
        total_return=p.total_return,
    )


def _summary_to_response(s: ProjectionSummary) -> SummaryResponse:
    return SummaryResponse(
        weekly_cash_flow_year_1=s.weekly_cash_flow_year_1,
        tax_benefit_year_1=s.tax_benefit_year_1,
        cumulative_tax_savings=s.cumulative_tax_savings,
        equity_at_year=s.equity_at_year,
        summary_year=s.summary_year,
        break_even_year=s.break_even_year,
        total_cash_invested=s.total_cash_invested,
        final_property_value=s.final_property_value,
        final_equity=s.final_equity,
    )


def project(req: ProjectionRequest) -> ProjectionResponse:
    """Build assumptions, run the full horizon and slice it for display.

    Year 0 is included in the slice whenever a construction phase exists.
    """
    assumptions, warnings = build_assumptions(req)
    horizon = assumptions.model.horizon_years

    series = run_projection(assumptions)
    year_from, year_to = clamp_year_range(
        req.year_from if req.year_from is not None else 1,
        req.year_to if req.year_to is not None else horizon,
        horizon,
        settings.default_max_year_span,
    )

    shown = slice_years(series, year_from, year_to)
    if assumptions.has_construction_phase and series and series[0].year == 0:
        shown = [series[0]] + shown

    return ProjectionResponse(
        model=assumptions.model.name,
        horizon_years=horizon,
        year_from=year_from,
        year_to=year_to,
        yearly_projections=[_year_to_response(p) for p in shown],
        summary=_summary_to_response(summarize(series, year_to)),
        warnings=warnings,
    )


@router.post("/projections", response_model=ProjectionResponse)
async def run_projections(req: ProjectionRequest):
    """Run a projection over the model's full horizon."""
    try:
        return project(req)
    except ValueError as e:
        logger.warning("Projection rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
