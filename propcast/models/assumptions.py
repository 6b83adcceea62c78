from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from propcast.models.investor import Investor, OwnershipAllocation
from propcast.models.overrides import Auto, Override

LONG_HORIZON_YEARS = 40
SHORT_HORIZON_YEARS = 30


class RepaymentType(Enum):
    INTEREST_ONLY = "io"
    PRINCIPAL_AND_INTEREST = "pi"


class LoanStatus(Enum):
    IO = "IO"
    PI = "P&I"


class CapitalizationPolicy(Enum):
    CASH = "cash"
    DEBT = "debt"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class LoanTerms:
    opening_balance: Decimal = Decimal("0")
    annual_rate_percent: Decimal = Decimal("0")  # 6 means 6%
    term_years: int = 30
    repayment_type: RepaymentType = RepaymentType.PRINCIPAL_AND_INTEREST
    io_years: int = 0  # Only meaningful for interest-only loans

    @property
    def is_active(self) -> bool:
        return self.opening_balance > 0

    @property
    def amortizing_months(self) -> int:
        """Months of P&I repayment once any interest-only period has ended."""
        io_years = self.io_years if self.repayment_type is RepaymentType.INTEREST_ONLY else 0
        return max(0, (self.term_years - io_years) * 12)


@dataclass(frozen=True)
class ConstructionConfig:
    months: int = 0
    interest_rate_percent: Decimal = Decimal("0")  # 0 falls back to the main loan rate
    capitalization_policy: CapitalizationPolicy = CapitalizationPolicy.CASH
    hybrid_cash_percentage: Decimal = Decimal("0")
    capitalize_all: bool = False
    equity_repayment_type: RepaymentType = RepaymentType.INTEREST_ONLY
    # Interest attributable to the land portion. None keeps the historical
    # approximation of treating every accrued dollar as deductible.
    non_deductible_interest: Decimal | None = None

    @property
    def is_active(self) -> bool:
        return self.months > 0


@dataclass(frozen=True)
class InterestRateOverride:
    """Replaces both loans' rates from ``effective_from_year`` onward."""
    rate_percent: Decimal
    effective_from_year: int = 1

    def applies_to(self, year: int) -> bool:
        return year >= self.effective_from_year


# ---- Depreciation strategies ----
# Two incompatible models exist for this engine; callers must pick one.

@dataclass(frozen=True)
class DiminishingSeedDepreciation:
    """Year-1 figure that shrinks by ``decay_rate`` percent every year."""
    seed: Decimal
    decay_rate: Decimal = Decimal("5")


@dataclass(frozen=True)
class BuildingPlantSplitDepreciation:
    """Capital works at 2.5% plus plant & equipment at a flat 15% every year."""
    building_value: Decimal
    plant_value: Decimal = Decimal("0")
    building_rate: Decimal = Decimal("2.5")
    plant_rate: Decimal = Decimal("15")


@dataclass(frozen=True)
class BuildingPlantDiminishingDepreciation:
    """Capital works at 2.5% prime cost, plant & equipment at 15% diminishing value."""
    building_value: Decimal
    plant_value: Decimal = Decimal("0")
    building_rate: Decimal = Decimal("2.5")
    plant_rate: Decimal = Decimal("15")


DepreciationStrategy = (
    DiminishingSeedDepreciation
    | BuildingPlantSplitDepreciation
    | BuildingPlantDiminishingDepreciation
)


@dataclass(frozen=True)
class ProjectionModel:
    name: str
    horizon_years: int
    depreciation: DepreciationStrategy


def diminishing_seed_model(
    seed: Decimal,
    horizon_years: int = LONG_HORIZON_YEARS,
) -> ProjectionModel:
    return ProjectionModel(
        name="diminishing_seed",
        horizon_years=horizon_years,
        depreciation=DiminishingSeedDepreciation(seed=seed),
    )


def building_plant_split_model(
    building_value: Decimal,
    plant_value: Decimal = Decimal("0"),
    horizon_years: int = SHORT_HORIZON_YEARS,
) -> ProjectionModel:
    return ProjectionModel(
        name="building_plant_split",
        horizon_years=horizon_years,
        depreciation=BuildingPlantSplitDepreciation(
            building_value=building_value,
            plant_value=plant_value,
        ),
    )


@dataclass(frozen=True)
class ProjectionAssumptions:
    model: ProjectionModel

    # Property
    initial_property_value: Decimal = Decimal("0")
    weekly_rent: Override = field(default_factory=Auto)

    # Financing
    main_loan: LoanTerms = field(default_factory=LoanTerms)
    equity_loan: LoanTerms = field(default_factory=LoanTerms)
    rate_override: InterestRateOverride | None = None

    # Growth & vacancy (percent)
    capital_growth_rate: Override = field(default_factory=Auto)
    rental_growth_rate: Override = field(default_factory=Auto)
    vacancy_rate: Override = field(default_factory=Auto)

    # Expenses
    property_management_rate: Override = field(default_factory=Auto)  # % of rental income
    council_rates: Decimal = Decimal("0")  # Annual
    insurance: Decimal = Decimal("0")  # Annual
    repairs: Decimal = Decimal("0")  # Annual
    expense_inflation_rate: Decimal = Decimal("2.5")

    # Tax
    income_indexation_rate: Decimal = Decimal("2.5")  # CPI applied to investor incomes
    investors: tuple[Investor, ...] = ()
    allocations: tuple[OwnershipAllocation, ...] = ()

    construction: ConstructionConfig | None = None

    @property
    def has_construction_phase(self) -> bool:
        return self.construction is not None and self.construction.is_active

    @property
    def total_debt(self) -> Decimal:
        return self.main_loan.opening_balance + self.equity_loan.opening_balance

    @property
    def lvr(self) -> Decimal:
        """Loan-to-value ratio in percent, against the initial property value."""
        if self.initial_property_value <= 0:
            return Decimal("0")
        return self.total_debt / self.initial_property_value * 100
