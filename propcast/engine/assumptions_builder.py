"""Assumption builder: turns a wire-format request into ProjectionAssumptions.

Sits between the API/CLI and the pure engine:
    ProjectionRequest + Settings defaults → (ProjectionAssumptions, warnings)

Missing numbers default to 0. Structural mistakes (an unknown model name)
raise ValueError; ownership that does not add up to 100% is only a warning.
"""

import logging
from decimal import Decimal

from propcast.api.schemas import (
    ConstructionRequest,
    DepreciationRequest,
    LoanRequest,
    OverrideField,
    OverrideTriplet,
    ProjectionRequest,
)
from propcast.config import settings
from propcast.models.assumptions import (
    BuildingPlantDiminishingDepreciation,
    CapitalizationPolicy,
    ConstructionConfig,
    InterestRateOverride,
    LONG_HORIZON_YEARS,
    LoanTerms,
    ProjectionAssumptions,
    ProjectionModel,
    RepaymentType,
    SHORT_HORIZON_YEARS,
    building_plant_split_model,
    diminishing_seed_model,
)
from propcast.models.investor import Investor, OwnershipAllocation, total_ownership
from propcast.models.overrides import Auto, Override, from_triplet

logger = logging.getLogger(__name__)

OWNERSHIP_TOLERANCE = Decimal("0.1")


def build_override(value: OverrideField) -> Override:
    if value is None:
        return Auto()
    if isinstance(value, OverrideTriplet):
        return from_triplet(value.mode, value.auto, value.manual)
    return Auto(Decimal(value))


def build_loan(req: LoanRequest) -> LoanTerms:
    return LoanTerms(
        opening_balance=req.opening_balance,
        annual_rate_percent=req.annual_rate_percent,
        term_years=req.term_years,
        repayment_type=RepaymentType(req.repayment_type),
        io_years=req.io_years,
    )


def build_construction(req: ConstructionRequest | None) -> ConstructionConfig | None:
    if req is None or req.months <= 0:
        return None
    return ConstructionConfig(
        months=req.months,
        interest_rate_percent=req.interest_rate_percent,
        capitalization_policy=CapitalizationPolicy(req.capitalization_policy),
        hybrid_cash_percentage=req.hybrid_cash_percentage,
        capitalize_all=req.capitalize_all,
        equity_repayment_type=RepaymentType(req.equity_repayment_type),
        non_deductible_interest=req.non_deductible_interest,
    )


def build_model(req: DepreciationRequest) -> ProjectionModel:
    """Resolve the caller's explicit depreciation/horizon choice."""
    if req.model == "diminishing_seed":
        return diminishing_seed_model(req.seed, req.horizon_years or LONG_HORIZON_YEARS)
    if req.model == "building_plant_split":
        return building_plant_split_model(
            req.building_value, req.plant_value, req.horizon_years or SHORT_HORIZON_YEARS
        )
    if req.model == "building_plant_diminishing":
        return ProjectionModel(
            name=req.model,
            horizon_years=req.horizon_years or SHORT_HORIZON_YEARS,
            depreciation=BuildingPlantDiminishingDepreciation(
                building_value=req.building_value,
                plant_value=req.plant_value,
            ),
        )
    raise ValueError(f"Unknown projection model: {req.model}")


def ownership_warnings(allocations: tuple[OwnershipAllocation, ...]) -> list[str]:
    if not allocations:
        return []
    total = total_ownership(allocations)
    if abs(total - 100) > OWNERSHIP_TOLERANCE:
        return [f"Total ownership percentages ({total}%) do not equal 100%"]
    return []


def build_assumptions(req: ProjectionRequest) -> tuple[ProjectionAssumptions, list[str]]:
    """Build ProjectionAssumptions from a request, applying configured defaults."""
    investors = tuple(
        Investor(
            id=i.id,
            name=i.name,
            annual_income=i.annual_income,
            other_income=i.other_income,
            has_medicare_levy=i.has_medicare_levy,
        )
        for i in req.investors
    )
    allocations = tuple(
        OwnershipAllocation(investor_id=a.investor_id, percentage=a.percentage)
        for a in req.allocations
    )

    rate_override = None
    if req.rate_override is not None:
        rate_override = InterestRateOverride(
            rate_percent=req.rate_override.rate_percent,
            effective_from_year=req.rate_override.effective_from_year,
        )

    assumptions = ProjectionAssumptions(
        model=build_model(req.depreciation),
        initial_property_value=req.initial_property_value,
        weekly_rent=build_override(req.weekly_rent),
        main_loan=build_loan(req.main_loan),
        equity_loan=build_loan(req.equity_loan),
        rate_override=rate_override,
        capital_growth_rate=build_override(req.capital_growth_rate),
        rental_growth_rate=build_override(req.rental_growth_rate),
        vacancy_rate=build_override(req.vacancy_rate),
        property_management_rate=build_override(req.property_management_rate),
        council_rates=req.council_rates,
        insurance=req.insurance,
        repairs=req.repairs,
        expense_inflation_rate=(
            req.expense_inflation_rate
            if req.expense_inflation_rate is not None
            else settings.expense_inflation_rate
        ),
        income_indexation_rate=(
            req.income_indexation_rate
            if req.income_indexation_rate is not None
            else settings.income_indexation_rate
        ),
        investors=investors,
        allocations=allocations,
        construction=build_construction(req.construction),
    )

    warnings = ownership_warnings(allocations)
    for w in warnings:
        logger.warning(w)
    return assumptions, warnings
