"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class OverrideTriplet(BaseModel):
    """Wire form of an auto-or-manual value."""
    mode: Literal["auto", "manual"] = "auto"
    auto: Decimal | None = None
    manual: Decimal | None = None


# A bare number is shorthand for {"mode": "auto", "auto": <number>}
OverrideField = OverrideTriplet | Decimal | None


class LoanRequest(BaseModel):
    opening_balance: Decimal = Decimal("0")
    annual_rate_percent: Decimal = Decimal("0")
    term_years: int = Field(30, ge=0)
    repayment_type: Literal["io", "pi"] = "pi"
    io_years: int = Field(0, ge=0)


class ConstructionRequest(BaseModel):
    months: int = 0
    interest_rate_percent: Decimal = Decimal("0")
    capitalization_policy: Literal["cash", "debt", "hybrid"] = "cash"
    hybrid_cash_percentage: Decimal = Decimal("0")
    capitalize_all: bool = False
    equity_repayment_type: Literal["io", "pi"] = "io"
    non_deductible_interest: Decimal | None = Field(
        None, description="Land-related interest excluded from the construction loss"
    )


class RateOverrideRequest(BaseModel):
    rate_percent: Decimal
    effective_from_year: int = Field(1, ge=1)


class InvestorRequest(BaseModel):
    id: str
    name: str = ""
    annual_income: Decimal = Decimal("0")
    other_income: Decimal = Decimal("0")
    has_medicare_levy: bool = True


class AllocationRequest(BaseModel):
    investor_id: str
    percentage: Decimal


class DepreciationRequest(BaseModel):
    model: Literal["diminishing_seed", "building_plant_split", "building_plant_diminishing"] = Field(
        ..., description="Depreciation/horizon model; there is no default"
    )
    seed: Decimal = Decimal("0")
    building_value: Decimal = Decimal("0")
    plant_value: Decimal = Decimal("0")
    horizon_years: int | None = Field(None, ge=1, le=100)


class ProjectionRequest(BaseModel):
    initial_property_value: Decimal = Decimal("0")
    weekly_rent: OverrideField = None

    main_loan: LoanRequest = Field(default_factory=LoanRequest)
    equity_loan: LoanRequest = Field(default_factory=LoanRequest)
    rate_override: RateOverrideRequest | None = None

    capital_growth_rate: OverrideField = None
    rental_growth_rate: OverrideField = None
    vacancy_rate: OverrideField = None
    property_management_rate: OverrideField = None

    council_rates: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    repairs: Decimal = Decimal("0")
    expense_inflation_rate: Decimal | None = None
    income_indexation_rate: Decimal | None = None

    investors: list[InvestorRequest] = Field(default_factory=list)
    allocations: list[AllocationRequest] = Field(default_factory=list)

    construction: ConstructionRequest | None = None
    depreciation: DepreciationRequest

    # Display slice; the full horizon is always computed
    year_from: int | None = None
    year_to: int | None = None


class ScenarioRequest(BaseModel):
    name: str
    assumptions: ProjectionRequest


class ComparisonRequest(BaseModel):
    scenarios: list[ScenarioRequest] = Field(..., min_length=1)


# ---- Response schemas ----

class YearProjectionResponse(BaseModel):
    year: int
    rental_income: Decimal
    property_value: Decimal
    main_loan_balance: Decimal
    equity_loan_balance: Decimal
    total_interest: Decimal
    main_loan_payment: Decimal
    equity_loan_payment: Decimal
    main_interest_year: Decimal
    equity_interest_year: Decimal
    main_loan_status: str
    equity_loan_status: str
    other_expenses: Decimal
    depreciation: Decimal
    taxable_income: Decimal
    tax_benefit: Decimal
    after_tax_cash_flow: Decimal
    cumulative_cash_flow: Decimal
    property_equity: Decimal
    total_return: Decimal


class SummaryResponse(BaseModel):
    weekly_cash_flow_year_1: Decimal
    tax_benefit_year_1: Decimal
    cumulative_tax_savings: Decimal
    equity_at_year: Decimal
    summary_year: int
    break_even_year: int | None = None
    total_cash_invested: Decimal
    final_property_value: Decimal
    final_equity: Decimal


class ProjectionResponse(BaseModel):
    model: str
    horizon_years: int
    year_from: int
    year_to: int
    yearly_projections: list[YearProjectionResponse]
    summary: SummaryResponse
    warnings: list[str] = Field(default_factory=list)


class ScenarioMetricsResponse(BaseModel):
    name: str
    rental_yield: Decimal
    lvr: Decimal
    interest_rate: Decimal
    total_roi: Decimal
    annualized_roi: Decimal
    average_annual_cash_flow: Decimal
    total_cumulative_cash_flow: Decimal
    cash_flow_volatility: Decimal
    break_even_year: int
    risk_score: Decimal
    risk_level: str


class ComparisonResponse(BaseModel):
    scenarios: list[ScenarioMetricsResponse]
    best_performing: str
    worst_performing: str
    average_roi: Decimal
    top_by_roi: list[str]
    top_by_cash_flow: list[str]
    top_risk_adjusted: list[str]
    risk_distribution: dict[str, int]
    roi_min: Decimal
    roi_max: Decimal
    roi_median: Decimal
    roi_standard_deviation: Decimal
    warnings: list[str] = Field(default_factory=list)
