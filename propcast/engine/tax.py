"""Australian resident income tax and household tax allocation.

Progressive brackets (2024-25) plus a simplified Medicare levy, and the
year-by-year split of a property's taxable result across its owners.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from propcast.engine.cashflow import compound
from propcast.models.investor import Investor, OwnershipAllocation, ownership_for
from propcast.models.results import InvestorTaxShare


@dataclass(frozen=True)
class TaxBracket:
    lower: Decimal  # Inclusive
    upper: Decimal | None  # None = no ceiling
    rate: Decimal


AU_BRACKETS_2024_25: tuple[TaxBracket, ...] = (
    TaxBracket(Decimal("0"), Decimal("18200"), Decimal("0")),
    TaxBracket(Decimal("18200"), Decimal("45000"), Decimal("0.19")),
    TaxBracket(Decimal("45000"), Decimal("120000"), Decimal("0.325")),
    TaxBracket(Decimal("120000"), Decimal("180000"), Decimal("0.37")),
    TaxBracket(Decimal("180000"), None, Decimal("0.45")),
)

MEDICARE_LEVY_RATE = Decimal("0.02")
MEDICARE_LEVY_THRESHOLD = Decimal("24276")


def income_tax(income: Decimal) -> Decimal:
    """Tax on ``income`` integrated across the bracket table."""
    if income <= 0:
        return Decimal("0")
    tax = Decimal("0")
    for bracket in AU_BRACKETS_2024_25:
        if income <= bracket.lower:
            break
        top = income if bracket.upper is None else min(income, bracket.upper)
        tax += (top - bracket.lower) * bracket.rate
    return tax


def medicare_levy(income: Decimal, has_medicare_levy: bool) -> Decimal:
    """Flat 2% on the whole income once it exceeds the low-income threshold."""
    if not has_medicare_levy or income <= MEDICARE_LEVY_THRESHOLD:
        return Decimal("0")
    return income * MEDICARE_LEVY_RATE


def total_tax(income: Decimal, has_medicare_levy: bool) -> Decimal:
    return income_tax(income) + medicare_levy(income, has_medicare_levy)


def marginal_rate(income: Decimal, has_medicare_levy: bool = False) -> Decimal:
    """Rate of the band ``income`` falls in. For display only, never for tax."""
    rate = Decimal("0")
    for bracket in AU_BRACKETS_2024_25:
        if income >= bracket.lower:
            rate = bracket.rate
    if has_medicare_levy and income > MEDICARE_LEVY_THRESHOLD:
        rate += MEDICARE_LEVY_RATE
    return rate


def cpi_multiplier(indexation_rate: Decimal, year: int) -> Decimal:
    """Compounding income indexation factor; 1 for year 0 and year 1."""
    return compound(indexation_rate, year - 1)


def allocate_year_tax(
    taxable_income: Decimal,
    investors: tuple[Investor, ...],
    allocations: tuple[OwnershipAllocation, ...],
    cpi: Decimal = Decimal("1"),
) -> list[InvestorTaxShare]:
    """Split one year's property taxable income (or loss) across owners.

    Each owner's tax is recomputed with their share added to their indexed
    base income, so the difference follows the progressive brackets exactly.
    Percentages are applied as supplied; they need not sum to 100.
    """
    shares: list[InvestorTaxShare] = []
    for investor in investors:
        percentage = ownership_for(investor.id, allocations)
        if percentage <= 0:
            continue

        base = investor.base_income * cpi
        allocated = taxable_income * percentage / 100
        shares.append(InvestorTaxShare(
            investor_id=investor.id,
            ownership_percentage=percentage,
            base_income=base,
            allocated_income=allocated,
            tax_without_property=total_tax(base, investor.has_medicare_levy),
            tax_with_property=total_tax(base + allocated, investor.has_medicare_levy),
            marginal_rate=marginal_rate(base, investor.has_medicare_levy),
        ))
    return shares


def compute_year_tax(
    taxable_income: Decimal,
    investors: tuple[Investor, ...],
    allocations: tuple[OwnershipAllocation, ...],
    cpi: Decimal = Decimal("1"),
) -> Decimal:
    """Change in total household tax caused by the property this year.

    Positive = the property costs the household tax; a loss gives a negative
    figure, reported by callers as a positive tax benefit.
    """
    shares = allocate_year_tax(taxable_income, investors, allocations, cpi)
    return sum((s.tax_difference for s in shares), Decimal("0"))


def tax_benefit(
    taxable_income: Decimal,
    investors: tuple[Investor, ...],
    allocations: tuple[OwnershipAllocation, ...],
    cpi: Decimal = Decimal("1"),
) -> Decimal:
    return -compute_year_tax(taxable_income, investors, allocations, cpi)
