"""Projection orchestrator: composes all engine sub-modules into a year series.

Pure computation. No I/O. ProjectionAssumptions in, list[YearProjection] out.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from propcast.engine.cashflow import operating_expenses, property_value, rental_income
from propcast.engine.construction import run_construction_phase
from propcast.engine.debt import (
    LoanAmortizationState,
    LoanYear,
    effective_rate,
    is_io_year,
    loan_status,
    opening_state,
    step_loan,
)
from propcast.engine.depreciation import compute_yearly_depreciation
from propcast.engine.tax import cpi_multiplier, tax_benefit
from propcast.models.assumptions import LoanStatus, ProjectionAssumptions
from propcast.models.results import YearProjection

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def _round(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _idle_year(state: LoanAmortizationState) -> LoanYear:
    return LoanYear(
        interest_paid=Decimal("0"),
        total_payment=Decimal("0"),
        ending_balance=state.balance,
        state=state,
    )


def run_projection(assumptions: ProjectionAssumptions) -> list[YearProjection]:
    """Run the full projection horizon.

    Returns year 0 (construction) when a construction phase is configured,
    followed by operating years 1..horizon. The whole horizon is always
    computed because the cumulative cash flow depends on every prior year;
    callers slice the result for display.
    """
    projections: list[YearProjection] = []
    main_state = opening_state(assumptions.main_loan)
    equity_state = opening_state(assumptions.equity_loan)
    equity_active = assumptions.equity_loan.is_active
    cumulative = Decimal("0")

    if assumptions.has_construction_phase:
        construction = run_construction_phase(assumptions, main_state, equity_state)
        logger.debug(
            "Construction phase: %s months, interest accrued %s, capitalized fraction %s",
            assumptions.construction.months,
            construction.total_interest_accrued,
            construction.capitalization_fraction,
        )
        main_state = construction.main_state
        equity_state = construction.equity_state
        cumulative = construction.projection.cumulative_cash_flow
        projections.append(construction.projection)

    override = assumptions.rate_override
    previous_value: Decimal | None = None

    for year in range(1, assumptions.model.horizon_years + 1):
        if override is not None and year == override.effective_from_year:
            logger.debug("Rate override %s%% in force from year %s", override.rate_percent, year)

        # Income & value
        income = _round(rental_income(assumptions, year))
        value = _round(property_value(assumptions, year))

        # Debt
        main_loan = assumptions.main_loan
        main_year = step_loan(
            main_state,
            effective_rate(main_loan, year, override),
            is_io_year(main_loan, year),
        )
        main_state = main_year.state

        equity_loan = assumptions.equity_loan
        if equity_active:
            equity_year = step_loan(
                equity_state,
                effective_rate(equity_loan, year, override),
                is_io_year(equity_loan, year),
            )
            equity_state = equity_year.state
            equity_status = loan_status(equity_loan, year)
        else:
            equity_year = _idle_year(equity_state)
            equity_status = LoanStatus.PI

        main_interest = _round(main_year.interest_paid)
        equity_interest = _round(equity_year.interest_paid)
        main_payment = _round(main_year.total_payment)
        equity_payment = _round(equity_year.total_payment)
        main_balance = _round(main_year.ending_balance)
        equity_balance = _round(equity_year.ending_balance)
        total_interest = main_interest + equity_interest

        # Expenses & depreciation
        other_expenses = _round(operating_expenses(assumptions, year, income)["total"])
        depreciation = _round(
            compute_yearly_depreciation(assumptions.model.depreciation, year).total
        )

        # Tax
        taxable = income - total_interest - other_expenses - depreciation
        benefit = _round(tax_benefit(
            taxable,
            assumptions.investors,
            assumptions.allocations,
            cpi_multiplier(assumptions.income_indexation_rate, year),
        ))

        # Cash flow & equity
        after_tax = income - other_expenses - (main_payment + equity_payment) + benefit
        cumulative += after_tax
        growth = Decimal("0") if previous_value is None else value - previous_value
        previous_value = value

        projections.append(YearProjection(
            year=year,
            rental_income=income,
            property_value=value,
            main_loan_balance=main_balance,
            equity_loan_balance=equity_balance,
            total_interest=total_interest,
            main_loan_payment=main_payment,
            equity_loan_payment=equity_payment,
            main_interest_year=main_interest,
            equity_interest_year=equity_interest,
            main_loan_status=loan_status(main_loan, year),
            equity_loan_status=equity_status,
            other_expenses=other_expenses,
            depreciation=depreciation,
            taxable_income=taxable,
            tax_benefit=benefit,
            after_tax_cash_flow=after_tax,
            cumulative_cash_flow=cumulative,
            property_equity=value - main_balance - equity_balance,
            total_return=after_tax + growth,
        ))

    return projections
