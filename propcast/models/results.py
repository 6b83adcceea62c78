from dataclasses import dataclass, field
from decimal import Decimal

from propcast.models.assumptions import LoanStatus


@dataclass(frozen=True)
class YearProjection:
    year: int  # 0 = construction phase

    # Income & value
    rental_income: Decimal = Decimal("0")
    property_value: Decimal = Decimal("0")

    # Debt
    main_loan_balance: Decimal = Decimal("0")
    equity_loan_balance: Decimal = Decimal("0")
    total_interest: Decimal = Decimal("0")
    main_loan_payment: Decimal = Decimal("0")
    equity_loan_payment: Decimal = Decimal("0")
    main_interest_year: Decimal = Decimal("0")
    equity_interest_year: Decimal = Decimal("0")
    main_loan_status: LoanStatus = LoanStatus.PI
    equity_loan_status: LoanStatus = LoanStatus.PI

    # Expenses & tax
    other_expenses: Decimal = Decimal("0")
    depreciation: Decimal = Decimal("0")
    taxable_income: Decimal = Decimal("0")  # Negative = loss
    tax_benefit: Decimal = Decimal("0")  # Positive = household tax saved

    # Cash flow & equity
    after_tax_cash_flow: Decimal = Decimal("0")
    cumulative_cash_flow: Decimal = Decimal("0")
    property_equity: Decimal = Decimal("0")
    total_return: Decimal = Decimal("0")

@dataclass(frozen=True)
class InvestorTaxShare:
    investor_id: str
    ownership_percentage: Decimal
    base_income: Decimal  # CPI-indexed
    allocated_income: Decimal  # Share of property taxable income (negative = loss)
    tax_without_property: Decimal
    tax_with_property: Decimal
    marginal_rate: Decimal

    @property
    def tax_difference(self) -> Decimal:
        return self.tax_with_property - self.tax_without_property


@dataclass(frozen=True)
class ProjectionSummary:
    weekly_cash_flow_year_1: Decimal = Decimal("0")
    tax_benefit_year_1: Decimal = Decimal("0")
    cumulative_tax_savings: Decimal = Decimal("0")
    equity_at_year: Decimal = Decimal("0")
    summary_year: int = 0
    break_even_year: int | None = None
    total_cash_invested: Decimal = Decimal("0")
    final_property_value: Decimal = Decimal("0")
    final_equity: Decimal = Decimal("0")


@dataclass
class ScenarioMetrics:
    name: str
    projections: list[YearProjection] = field(default_factory=list)

    initial_property_value: Decimal = Decimal("0")
    annual_rent: Decimal = Decimal("0")
    rental_yield: Decimal = Decimal("0")  # Percent
    lvr: Decimal = Decimal("0")  # Percent
    interest_rate: Decimal = Decimal("0")  # Percent

    total_roi: Decimal = Decimal("0")  # Percent
    annualized_roi: Decimal = Decimal("0")  # Fraction
    average_annual_cash_flow: Decimal = Decimal("0")
    total_cumulative_cash_flow: Decimal = Decimal("0")
    cash_flow_volatility: Decimal = Decimal("0")
    break_even_year: int = 0  # 0 = never
    risk_score: Decimal = Decimal("0")
    risk_level: str = "Low"


@dataclass
class ComparisonResult:
    scenarios: list[ScenarioMetrics] = field(default_factory=list)  # Ranked by total ROI
    best_performing: str = ""
    worst_performing: str = ""
    average_roi: Decimal = Decimal("0")
    top_by_roi: list[str] = field(default_factory=list)
    top_by_cash_flow: list[str] = field(default_factory=list)
    top_risk_adjusted: list[str] = field(default_factory=list)
    risk_distribution: dict[str, int] = field(
        default_factory=lambda: {"low": 0, "medium": 0, "high": 0}
    )
    roi_min: Decimal = Decimal("0")
    roi_max: Decimal = Decimal("0")
    roi_median: Decimal = Decimal("0")
    roi_standard_deviation: Decimal = Decimal("0")
