from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Investor:
    id: str
    annual_income: Decimal = Decimal("0")
    other_income: Decimal = Decimal("0")
    has_medicare_levy: bool = True
    name: str = ""

    @property
    def base_income(self) -> Decimal:
        """Taxable income before any property result is added."""
        return self.annual_income + self.other_income


@dataclass(frozen=True)
class OwnershipAllocation:
    investor_id: str
    percentage: Decimal  # 50 means 50%

    @property
    def fraction(self) -> Decimal:
        return self.percentage / 100


def ownership_for(
    investor_id: str,
    allocations: tuple[OwnershipAllocation, ...],
) -> Decimal:
    """Ownership percentage held by an investor (first matching allocation, else 0)."""
    for allocation in allocations:
        if allocation.investor_id == investor_id:
            return allocation.percentage
    return Decimal("0")


def total_ownership(allocations: tuple[OwnershipAllocation, ...]) -> Decimal:
    return sum((a.percentage for a in allocations), Decimal("0"))
