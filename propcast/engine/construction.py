"""Pre-completion construction phase.

Runs once, before the first rental year. Interest accrued while the property
is being built is split between cash paid during construction and interest
capitalized onto the loans, which changes the opening balances of the
operating phase. The phase is reported as a synthetic year 0.

Pure functions: dataclasses in, dataclass out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from propcast.engine.debt import (
    MONTHS_PER_YEAR,
    LoanAmortizationState,
    monthly_payment,
    monthly_rate,
)
from propcast.engine.tax import tax_benefit
from propcast.models.assumptions import (
    CapitalizationPolicy,
    ConstructionConfig,
    LoanStatus,
    ProjectionAssumptions,
    RepaymentType,
)
from propcast.models.results import YearProjection

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class LoanConstructionCost:
    interest_accrued: Decimal = Decimal("0")
    interest_capitalized: Decimal = Decimal("0")
    interest_cash: Decimal = Decimal("0")
    principal_paid: Decimal = Decimal("0")  # Always paid in cash

    @property
    def cash_paid(self) -> Decimal:
        return self.interest_cash + self.principal_paid


@dataclass(frozen=True)
class ConstructionPhaseResult:
    main_state: LoanAmortizationState
    equity_state: LoanAmortizationState
    main: LoanConstructionCost
    equity: LoanConstructionCost
    capitalization_fraction: Decimal
    taxable_income: Decimal
    tax_benefit: Decimal
    projection: YearProjection

    @property
    def total_interest_accrued(self) -> Decimal:
        return self.main.interest_accrued + self.equity.interest_accrued

    @property
    def total_cash_paid(self) -> Decimal:
        return self.main.cash_paid + self.equity.cash_paid


def capitalization_fraction(config: ConstructionConfig) -> Decimal:
    """Share of construction interest added to the loan rather than paid in cash."""
    if config.capitalize_all or config.capitalization_policy is CapitalizationPolicy.DEBT:
        return Decimal("1")
    if config.capitalization_policy is CapitalizationPolicy.CASH:
        return Decimal("0")
    fraction = (100 - config.hybrid_cash_percentage) / 100
    return max(Decimal("0"), min(Decimal("1"), fraction))


def _interest_only_cost(
    state: LoanAmortizationState,
    rate: Decimal,
    months: int,
    fraction: Decimal,
) -> tuple[LoanConstructionCost, LoanAmortizationState]:
    accrued = state.balance * rate * months
    capitalized = accrued * fraction
    cost = LoanConstructionCost(
        interest_accrued=accrued,
        interest_capitalized=capitalized,
        interest_cash=accrued - capitalized,
    )
    return cost, LoanAmortizationState(
        balance=state.balance + capitalized,
        remaining_amortizing_months=state.remaining_amortizing_months,
    )


def _amortizing_cost(
    state: LoanAmortizationState,
    rate: Decimal,
    months: int,
    term_months: int,
    fraction: Decimal,
) -> tuple[LoanConstructionCost, LoanAmortizationState]:
    # Payment is sized on the full loan term, not the construction window.
    pmt = monthly_payment(state.balance, rate, term_months)
    balance = state.balance
    accrued = Decimal("0")
    capitalized = Decimal("0")
    principal_paid = Decimal("0")

    for _ in range(months):
        interest = balance * rate
        principal = min(max(Decimal("0"), pmt - interest), balance)
        capitalized_interest = interest * fraction
        accrued += interest
        capitalized += capitalized_interest
        principal_paid += principal
        balance = max(Decimal("0"), balance - principal + capitalized_interest)
        if balance <= 0:
            break

    cost = LoanConstructionCost(
        interest_accrued=accrued,
        interest_capitalized=capitalized,
        interest_cash=accrued - capitalized,
        principal_paid=principal_paid,
    )
    return cost, LoanAmortizationState(
        balance=balance,
        remaining_amortizing_months=max(0, state.remaining_amortizing_months - months),
    )


def run_construction_phase(
    assumptions: ProjectionAssumptions,
    main_state: LoanAmortizationState,
    equity_state: LoanAmortizationState,
) -> ConstructionPhaseResult:
    """Accrue construction interest and produce the year-0 record.

    The taxable loss is the whole accrued interest unless the caller has
    supplied the non-deductible (land) portion; the engine never estimates
    that split itself.
    """
    config = assumptions.construction
    if config is None or not config.is_active:
        raise ValueError("No active construction phase configured")

    months = config.months
    fraction = capitalization_fraction(config)

    main_rate_percent = config.interest_rate_percent or assumptions.main_loan.annual_rate_percent
    main_cost, main_after = _interest_only_cost(
        main_state, monthly_rate(main_rate_percent), months, fraction
    )

    equity_rate = monthly_rate(assumptions.equity_loan.annual_rate_percent)
    if equity_state.balance <= 0:
        equity_cost, equity_after = LoanConstructionCost(), equity_state
    elif config.equity_repayment_type is RepaymentType.INTEREST_ONLY:
        equity_cost, equity_after = _interest_only_cost(equity_state, equity_rate, months, fraction)
    else:
        equity_cost, equity_after = _amortizing_cost(
            equity_state,
            equity_rate,
            months,
            assumptions.equity_loan.term_years * MONTHS_PER_YEAR,
            fraction,
        )

    accrued = main_cost.interest_accrued + equity_cost.interest_accrued
    deductible = accrued
    if config.non_deductible_interest is not None:
        deductible = max(Decimal("0"), accrued - config.non_deductible_interest)

    taxable = (-deductible).quantize(TWO_PLACES, ROUND_HALF_UP)
    benefit = tax_benefit(
        taxable, assumptions.investors, assumptions.allocations
    ).quantize(TWO_PLACES, ROUND_HALF_UP)

    main_cash = main_cost.cash_paid.quantize(TWO_PLACES, ROUND_HALF_UP)
    equity_cash = equity_cost.cash_paid.quantize(TWO_PLACES, ROUND_HALF_UP)
    after_tax = -(main_cash + equity_cash) + benefit

    main_interest = main_cost.interest_accrued.quantize(TWO_PLACES, ROUND_HALF_UP)
    equity_interest = equity_cost.interest_accrued.quantize(TWO_PLACES, ROUND_HALF_UP)
    equity_status = (
        LoanStatus.PI
        if config.equity_repayment_type is RepaymentType.PRINCIPAL_AND_INTEREST
        else LoanStatus.IO
    )

    projection = YearProjection(
        year=0,
        total_interest=main_interest + equity_interest,
        main_loan_payment=main_cash,
        equity_loan_payment=equity_cash,
        main_interest_year=main_interest,
        equity_interest_year=equity_interest,
        main_loan_status=LoanStatus.IO,
        equity_loan_status=equity_status,
        taxable_income=taxable,
        tax_benefit=benefit,
        after_tax_cash_flow=after_tax,
        cumulative_cash_flow=after_tax,
        total_return=after_tax,
    )

    return ConstructionPhaseResult(
        main_state=main_after,
        equity_state=equity_after,
        main=main_cost,
        equity=equity_cost,
        capitalization_fraction=fraction,
        taxable_income=taxable,
        tax_benefit=benefit,
        projection=projection,
    )
