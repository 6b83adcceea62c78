"""Year-at-a-time loan amortization.

Each loan carries a ``LoanAmortizationState`` that is folded through the
projection years in order. Interest-only years leave the balance alone;
amortizing years run month by month against an annuity payment recomputed
from the remaining balance and months at the start of the year.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from dataclasses import dataclass, replace
from decimal import Decimal

from propcast.models.assumptions import (
    InterestRateOverride,
    LoanStatus,
    LoanTerms,
    RepaymentType,
)

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class LoanAmortizationState:
    balance: Decimal
    remaining_amortizing_months: int


@dataclass(frozen=True)
class LoanYear:
    interest_paid: Decimal
    total_payment: Decimal
    ending_balance: Decimal
    state: LoanAmortizationState

    @property
    def principal_paid(self) -> Decimal:
        return self.total_payment - self.interest_paid


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / 100 / MONTHS_PER_YEAR


def monthly_payment(balance: Decimal, rate: Decimal, remaining_months: int) -> Decimal:
    """Fixed annuity payment that clears ``balance`` over ``remaining_months``.

    ``rate`` is the monthly rate as a fraction. A zero rate pays the balance
    off straight-line.
    """
    if remaining_months <= 0:
        return Decimal("0")
    if rate == 0:
        return balance / remaining_months
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + rate) ** remaining_months
    return balance * (rate * factor) / (factor - 1)


def opening_state(loan: LoanTerms) -> LoanAmortizationState:
    return LoanAmortizationState(
        balance=loan.opening_balance,
        remaining_amortizing_months=loan.amortizing_months,
    )


def is_io_year(loan: LoanTerms, year: int) -> bool:
    return loan.repayment_type is RepaymentType.INTEREST_ONLY and year <= loan.io_years


def loan_status(loan: LoanTerms, year: int) -> LoanStatus:
    return LoanStatus.IO if is_io_year(loan, year) else LoanStatus.PI


def step_loan(
    state: LoanAmortizationState,
    annual_rate_percent: Decimal,
    io_year: bool,
) -> LoanYear:
    """Advance one loan by one year.

    Must be called once per year in increasing year order: the remaining
    month counter only moves forward.
    """
    rate = monthly_rate(annual_rate_percent)

    if io_year:
        interest = state.balance * rate * MONTHS_PER_YEAR
        return LoanYear(
            interest_paid=interest,
            total_payment=interest,
            ending_balance=state.balance,
            state=state,
        )

    if state.balance <= 0 or state.remaining_amortizing_months <= 0:
        return LoanYear(
            interest_paid=Decimal("0"),
            total_payment=Decimal("0"),
            ending_balance=max(state.balance, Decimal("0")),
            state=state,
        )

    pmt = monthly_payment(state.balance, rate, state.remaining_amortizing_months)
    balance = state.balance
    remaining = state.remaining_amortizing_months
    interest_paid = Decimal("0")
    total_payment = Decimal("0")

    for _ in range(min(MONTHS_PER_YEAR, remaining)):
        interest = balance * rate
        principal = min(pmt - interest, balance)
        balance = max(Decimal("0"), balance - principal)
        interest_paid += interest
        total_payment += interest + principal
        remaining -= 1
        if balance <= 0:
            break

    new_state = replace(state, balance=balance, remaining_amortizing_months=remaining)
    return LoanYear(
        interest_paid=interest_paid,
        total_payment=total_payment,
        ending_balance=balance,
        state=new_state,
    )


def effective_rate(
    loan: LoanTerms,
    year: int,
    rate_override: InterestRateOverride | None = None,
) -> Decimal:
    """Loan rate for ``year``, honouring a global rate override once it is in force."""
    if rate_override is not None and rate_override.applies_to(year):
        return rate_override.rate_percent
    return loan.annual_rate_percent
