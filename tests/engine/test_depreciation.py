from decimal import Decimal

import pytest

from propcast.engine.depreciation import compute_yearly_depreciation
from propcast.models.assumptions import (
    BuildingPlantDiminishingDepreciation,
    BuildingPlantSplitDepreciation,
    DiminishingSeedDepreciation,
)


class TestDiminishingSeed:
    def test_first_year_is_seed(self):
        strategy = DiminishingSeedDepreciation(seed=Decimal("10000"))
        assert compute_yearly_depreciation(strategy, 1).total == Decimal("10000")

    def test_decays_five_percent(self):
        strategy = DiminishingSeedDepreciation(seed=Decimal("10000"))
        assert compute_yearly_depreciation(strategy, 2).total == Decimal("9500")
        assert compute_yearly_depreciation(strategy, 3).total == Decimal("9025")


class TestBuildingPlantSplit:
    def test_flat_every_year(self):
        strategy = BuildingPlantSplitDepreciation(
            building_value=Decimal("400000"), plant_value=Decimal("20000")
        )
        for year in (1, 7, 20):
            dep = compute_yearly_depreciation(strategy, year)
            assert dep.building == Decimal("10000")
            assert dep.plant == Decimal("3000")
            assert dep.total == Decimal("13000")


class TestBuildingPlantDiminishing:
    def test_plant_diminishes(self):
        strategy = BuildingPlantDiminishingDepreciation(
            building_value=Decimal("400000"), plant_value=Decimal("20000")
        )
        assert compute_yearly_depreciation(strategy, 1).plant == Decimal("3000")
        assert compute_yearly_depreciation(strategy, 2).plant == Decimal("2550")
        assert compute_yearly_depreciation(strategy, 2).building == Decimal("10000")


class TestEdgeCases:
    def test_construction_year_has_none(self):
        strategy = DiminishingSeedDepreciation(seed=Decimal("10000"))
        assert compute_yearly_depreciation(strategy, 0).total == Decimal("0")

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            compute_yearly_depreciation(object(), 1)


class TestFullRate:
    def test_plant_fully_written_off(self):
        strategy = BuildingPlantDiminishingDepreciation(
            building_value=Decimal("0"), plant_value=Decimal("20000"), plant_rate=Decimal("100")
        )
        assert compute_yearly_depreciation(strategy, 1).plant == Decimal("20000")
        assert compute_yearly_depreciation(strategy, 2).plant == Decimal("0")
