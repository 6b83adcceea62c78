"""Depreciation under the strategy the caller selected.

Australian-style deductions: capital works (building) at 2.5% prime cost and
plant & equipment at 15%, or a single year-1 estimate that diminishes by a
fixed percentage each year.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from propcast.engine.cashflow import compound
from propcast.models.assumptions import (
    BuildingPlantDiminishingDepreciation,
    BuildingPlantSplitDepreciation,
    DepreciationStrategy,
    DiminishingSeedDepreciation,
)


@dataclass(frozen=True)
class YearlyDepreciation:
    year: int
    building: Decimal
    plant: Decimal
    total: Decimal


def _diminishing_seed(strategy: DiminishingSeedDepreciation, year: int) -> YearlyDepreciation:
    factor = compound(-strategy.decay_rate, year - 1)
    amount = max(Decimal("0"), strategy.seed * factor)
    return YearlyDepreciation(year=year, building=Decimal("0"), plant=Decimal("0"), total=amount)


def _building_plant_split(strategy: BuildingPlantSplitDepreciation, year: int) -> YearlyDepreciation:
    # Plant stays at the flat year-1 figure every year, even past its cost.
    building = strategy.building_value * strategy.building_rate / 100
    plant = strategy.plant_value * strategy.plant_rate / 100
    return YearlyDepreciation(year=year, building=building, plant=plant, total=building + plant)


def _building_plant_diminishing(
    strategy: BuildingPlantDiminishingDepreciation, year: int
) -> YearlyDepreciation:
    plant_rate = strategy.plant_rate / 100
    building = strategy.building_value * strategy.building_rate / 100
    remaining_plant = strategy.plant_value * compound(-strategy.plant_rate, year - 1)
    plant = remaining_plant * plant_rate
    return YearlyDepreciation(year=year, building=building, plant=plant, total=building + plant)


def compute_yearly_depreciation(strategy: DepreciationStrategy, year: int) -> YearlyDepreciation:
    """Depreciation deduction for operating year ``year`` (1-indexed)."""
    if year < 1:
        return YearlyDepreciation(year=year, building=Decimal("0"), plant=Decimal("0"), total=Decimal("0"))
    if isinstance(strategy, DiminishingSeedDepreciation):
        return _diminishing_seed(strategy, year)
    if isinstance(strategy, BuildingPlantSplitDepreciation):
        return _building_plant_split(strategy, year)
    if isinstance(strategy, BuildingPlantDiminishingDepreciation):
        return _building_plant_diminishing(strategy, year)
    raise ValueError(f"Unknown depreciation strategy: {type(strategy).__name__}")
