"""Rental income, property value and operating expenses.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from propcast.models.assumptions import ProjectionAssumptions
from propcast.models.overrides import resolve

WEEKS_PER_YEAR = 52


def compound(rate_percent: Decimal, periods: int) -> Decimal:
    """Growth factor (1 + rate)^periods; 1 when no period has elapsed, even at -100%."""
    if periods <= 0:
        return Decimal("1")
    return (1 + rate_percent / 100) ** periods


def annual_rent(assumptions: ProjectionAssumptions) -> Decimal:
    """Year-1 gross rent before vacancy."""
    return resolve(assumptions.weekly_rent) * WEEKS_PER_YEAR


def rental_income(assumptions: ProjectionAssumptions, year: int) -> Decimal:
    """Rent collected in ``year`` (1-indexed), after growth and vacancy."""
    vacancy = resolve(assumptions.vacancy_rate) / 100
    gross = annual_rent(assumptions) * compound(resolve(assumptions.rental_growth_rate), year - 1)
    return gross * (1 - vacancy)


def property_value(assumptions: ProjectionAssumptions, year: int) -> Decimal:
    """Property value during ``year``; year 1 is the initial value."""
    return assumptions.initial_property_value * compound(
        resolve(assumptions.capital_growth_rate), year - 1
    )


def expense_inflation(assumptions: ProjectionAssumptions, year: int) -> Decimal:
    return compound(assumptions.expense_inflation_rate, year - 1)


def operating_expenses(
    assumptions: ProjectionAssumptions,
    year: int,
    income: Decimal | None = None,
) -> dict[str, Decimal]:
    """Itemized operating expenses for a given year.

    Management is charged on rent actually collected; the fixed annual
    figures grow with expense inflation.
    """
    if income is None:
        income = rental_income(assumptions, year)
    inflation = expense_inflation(assumptions, year)

    management = income * resolve(assumptions.property_management_rate) / 100
    council_rates = assumptions.council_rates * inflation
    insurance = assumptions.insurance * inflation
    repairs = assumptions.repairs * inflation

    return {
        "property_management": management,
        "council_rates": council_rates,
        "insurance": insurance,
        "repairs": repairs,
        "total": management + council_rates + insurance + repairs,
    }


def rental_yield(assumptions: ProjectionAssumptions) -> Decimal:
    """Gross year-1 rent as a percentage of the initial property value."""
    if assumptions.initial_property_value <= 0:
        return Decimal("0")
    return annual_rent(assumptions) / assumptions.initial_property_value * 100
