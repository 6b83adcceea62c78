"""Display slicing and scalar summaries of a projection series.

The series is always computed in full; these helpers only read it.
"""

from decimal import Decimal, ROUND_HALF_UP

from propcast.engine.cashflow import WEEKS_PER_YEAR
from propcast.models.results import ProjectionSummary, YearProjection

DEFAULT_MAX_YEAR_SPAN = 25
TWO_PLACES = Decimal("0.01")


def clamp_year_range(
    year_from: int,
    year_to: int,
    horizon: int,
    max_span: int = DEFAULT_MAX_YEAR_SPAN,
) -> tuple[int, int]:
    """Keep a requested display range inside the horizon and under ``max_span`` years."""
    start = max(1, min(horizon, year_from))
    end = max(start, min(horizon, year_to))
    if end - start + 1 > max_span:
        end = start + max_span - 1
    return start, end


def slice_years(
    projections: list[YearProjection],
    year_from: int,
    year_to: int,
) -> list[YearProjection]:
    return [p for p in projections if year_from <= p.year <= year_to]


def find_year(projections: list[YearProjection], year: int) -> YearProjection | None:
    for p in projections:
        if p.year == year:
            return p
    return None


def break_even_year(projections: list[YearProjection]) -> int | None:
    """First operating year whose after-tax cash flow is positive."""
    for p in projections:
        if p.year >= 1 and p.after_tax_cash_flow > 0:
            return p.year
    return None


def total_cash_invested(projections: list[YearProjection]) -> Decimal:
    """Deepest point of the cumulative cash flow, as a positive amount."""
    lowest = min((p.cumulative_cash_flow for p in projections), default=Decimal("0"))
    return abs(min(Decimal("0"), lowest))


def cumulative_tax_savings(projections: list[YearProjection], through_year: int) -> Decimal:
    """Sum of positive tax benefits up to and including ``through_year``."""
    return sum(
        (max(Decimal("0"), p.tax_benefit) for p in projections if p.year <= through_year),
        Decimal("0"),
    )


def summarize(projections: list[YearProjection], year_to: int | None = None) -> ProjectionSummary:
    """Scalar figures persisted alongside a scenario."""
    if not projections:
        return ProjectionSummary()

    final = projections[-1]
    if year_to is None:
        year_to = final.year

    year_1 = find_year(projections, 1)
    at_year = find_year(projections, year_to)

    return ProjectionSummary(
        weekly_cash_flow_year_1=(
            (year_1.after_tax_cash_flow / WEEKS_PER_YEAR).quantize(TWO_PLACES, ROUND_HALF_UP)
            if year_1
            else Decimal("0")
        ),
        tax_benefit_year_1=year_1.tax_benefit if year_1 else Decimal("0"),
        cumulative_tax_savings=cumulative_tax_savings(projections, year_to),
        equity_at_year=at_year.property_equity if at_year else Decimal("0"),
        summary_year=year_to,
        break_even_year=break_even_year(projections),
        total_cash_invested=total_cash_invested(projections),
        final_property_value=final.property_value,
        final_equity=final.property_equity,
    )
