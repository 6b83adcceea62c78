"""CLI for running a projection from a JSON assumptions file.

Usage:
    python -m propcast.cli assumptions.json
    python -m propcast.cli assumptions.json --from 5 --to 15
    python -m propcast.cli assumptions.json --json
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from propcast.api.routes.projections import project
from propcast.api.schemas import ProjectionRequest, ProjectionResponse
from propcast.config import settings

logger = logging.getLogger(__name__)


def print_projection(resp: ProjectionResponse) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Projection: {resp.model} ({resp.horizon_years} years)")
    print(f"  Showing years {resp.year_from}-{resp.year_to}")
    print(f"{'=' * 60}")
    print(
        f"  {'Year':>4}  {'Rent':>10}  {'Value':>12}  {'Debt':>12}  "
        f"{'Tax Ben.':>10}  {'After Tax':>10}  {'Cumulative':>12}  {'Equity':>12}"
    )
    for p in resp.yearly_projections:
        debt = p.main_loan_balance + p.equity_loan_balance
        print(
            f"  {p.year:>4}  {p.rental_income:>10,.0f}  {p.property_value:>12,.0f}  {debt:>12,.0f}  "
            f"{p.tax_benefit:>10,.0f}  {p.after_tax_cash_flow:>10,.0f}  "
            f"{p.cumulative_cash_flow:>12,.0f}  {p.property_equity:>12,.0f}"
        )
    print()

    s = resp.summary
    break_even = s.break_even_year if s.break_even_year is not None else "Never"
    print(f"  Weekly cash flow (yr 1):  ${s.weekly_cash_flow_year_1:,.2f}")
    print(f"  Tax benefit (yr 1):       ${s.tax_benefit_year_1:,.0f}")
    print(f"  Tax savings to yr {s.summary_year}:    ${s.cumulative_tax_savings:,.0f}")
    print(f"  Equity at yr {s.summary_year}:         ${s.equity_at_year:,.0f}")
    print(f"  Break-even year:          {break_even}")
    print(f"  Total cash invested:      ${s.total_cash_invested:,.0f}")
    print()

    for w in resp.warnings:
        print(f"  WARNING: {w}")
    if resp.warnings:
        print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Leveraged property projection CLI")
    parser.add_argument("assumptions", help="Path to a JSON assumptions file")
    parser.add_argument("--from", dest="year_from", type=int, help="First year to display")
    parser.add_argument("--to", dest="year_to", type=int, help="Last year to display")
    parser.add_argument("--json", action="store_true", help="Print the response as JSON")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    try:
        req = ProjectionRequest.model_validate_json(Path(args.assumptions).read_text())
    except (OSError, ValidationError) as e:
        print(f"Could not load assumptions: {e}", file=sys.stderr)
        return 1

    if args.year_from is not None:
        req.year_from = args.year_from
    if args.year_to is not None:
        req.year_to = args.year_to

    try:
        resp = project(req)
    except ValueError as e:
        logger.error("Projection failed: %s", e)
        print(f"Projection failed: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(resp.model_dump_json(indent=2))
    else:
        print_projection(resp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
