"""Canonical test fixtures used across all engine tests.

Fixture: $600K investment property, $480K main loan at 6% (5 years IO then
P&I over a 30-year term), $550/week rent, building & plant depreciation.
Investor: single owner on $80K, no Medicare levy.
"""

import pytest
from decimal import Decimal

from propcast.models.assumptions import (
    CapitalizationPolicy,
    ConstructionConfig,
    LoanTerms,
    ProjectionAssumptions,
    RepaymentType,
    building_plant_split_model,
)
from propcast.models.investor import Investor, OwnershipAllocation
from propcast.models.overrides import Auto


@pytest.fixture
def sole_investor() -> Investor:
    return Investor(id="inv-1", annual_income=Decimal("80000"), has_medicare_levy=False)


@pytest.fixture
def canonical_assumptions(sole_investor) -> ProjectionAssumptions:
    """$600K property, 80% LVR, single owner."""
    return ProjectionAssumptions(
        model=building_plant_split_model(Decimal("300000"), Decimal("20000")),
        initial_property_value=Decimal("600000"),
        weekly_rent=Auto(Decimal("550")),
        main_loan=LoanTerms(
            opening_balance=Decimal("480000"),
            annual_rate_percent=Decimal("6"),
            term_years=30,
            repayment_type=RepaymentType.INTEREST_ONLY,
            io_years=5,
        ),
        capital_growth_rate=Auto(Decimal("4")),
        rental_growth_rate=Auto(Decimal("3")),
        vacancy_rate=Auto(Decimal("2")),
        property_management_rate=Auto(Decimal("7")),
        council_rates=Decimal("2000"),
        insurance=Decimal("1500"),
        repairs=Decimal("1000"),
        investors=(sole_investor,),
        allocations=(OwnershipAllocation(investor_id="inv-1", percentage=Decimal("100")),),
    )


@pytest.fixture
def equity_loan() -> LoanTerms:
    """$100K equity release at 6.5%, P&I over 30 years."""
    return LoanTerms(
        opening_balance=Decimal("100000"),
        annual_rate_percent=Decimal("6.5"),
        term_years=30,
    )


@pytest.fixture
def construction_config() -> ConstructionConfig:
    """12-month build; construction rate falls back to the main loan rate."""
    return ConstructionConfig(
        months=12,
        interest_rate_percent=Decimal("0"),
        capitalization_policy=CapitalizationPolicy.CASH,
    )


@pytest.fixture
def projection_payload() -> dict:
    """Wire-form body for the projections endpoint and CLI."""
    return {
        "initial_property_value": "600000",
        "weekly_rent": {"mode": "auto", "auto": "550", "manual": None},
        "main_loan": {
            "opening_balance": "480000",
            "annual_rate_percent": "6",
            "term_years": 30,
            "repayment_type": "io",
            "io_years": 5,
        },
        "capital_growth_rate": "4",
        "rental_growth_rate": "3",
        "vacancy_rate": "2",
        "property_management_rate": "7",
        "council_rates": "2000",
        "insurance": "1500",
        "repairs": "1000",
        "investors": [
            {"id": "inv-1", "annual_income": "80000", "has_medicare_levy": False},
        ],
        "allocations": [{"investor_id": "inv-1", "percentage": "100"}],
        "depreciation": {
            "model": "building_plant_split",
            "building_value": "300000",
            "plant_value": "20000",
        },
    }
