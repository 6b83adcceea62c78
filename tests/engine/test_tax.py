from decimal import Decimal

from propcast.engine.tax import (
    allocate_year_tax,
    compute_year_tax,
    cpi_multiplier,
    income_tax,
    marginal_rate,
    medicare_levy,
    tax_benefit,
    total_tax,
)
from propcast.models.investor import Investor, OwnershipAllocation


class TestIncomeTax:
    def test_tax_free_threshold(self):
        assert income_tax(Decimal("18200")) == Decimal("0")

    def test_negative_income(self):
        assert income_tax(Decimal("-5000")) == Decimal("0")

    def test_middle_bracket(self):
        # 26,800 × 19% + 35,000 × 32.5%
        assert income_tax(Decimal("80000")) == Decimal("16467")
        assert income_tax(Decimal("70000")) == Decimal("13217")

    def test_top_bracket(self):
        # 5,092 + 24,375 + 22,200 + 20,000 × 45%
        assert income_tax(Decimal("200000")) == Decimal("60667")


class TestMedicareLevy:
    def test_at_threshold_no_levy(self):
        assert medicare_levy(Decimal("24276"), True) == Decimal("0")

    def test_applies_to_whole_income(self):
        assert medicare_levy(Decimal("30000"), True) == Decimal("600")

    def test_exempt(self):
        assert medicare_levy(Decimal("100000"), False) == Decimal("0")

    def test_total_tax_includes_levy(self):
        assert total_tax(Decimal("80000"), True) == Decimal("16467") + Decimal("1600")


class TestMarginalRate:
    def test_band_lower_edge_is_inclusive(self):
        assert marginal_rate(Decimal("18200")) == Decimal("0.19")
        assert marginal_rate(Decimal("18199")) == Decimal("0")

    def test_top_band(self):
        assert marginal_rate(Decimal("250000")) == Decimal("0.45")

    def test_with_levy(self):
        assert marginal_rate(Decimal("100000"), has_medicare_levy=True) == Decimal("0.345")


class TestCpiMultiplier:
    def test_first_years_unindexed(self):
        assert cpi_multiplier(Decimal("2.5"), 0) == Decimal("1")
        assert cpi_multiplier(Decimal("2.5"), 1) == Decimal("1")

    def test_compounds(self):
        assert cpi_multiplier(Decimal("2.5"), 3) == Decimal("1.050625")


class TestHouseholdAllocation:
    def test_single_owner_loss(self, sole_investor):
        allocations = (OwnershipAllocation("inv-1", Decimal("100")),)
        benefit = tax_benefit(Decimal("-10000"), (sole_investor,), allocations)
        assert benefit == Decimal("3250")

    def test_profit_costs_tax(self, sole_investor):
        allocations = (OwnershipAllocation("inv-1", Decimal("100")),)
        assert compute_year_tax(Decimal("10000"), (sole_investor,), allocations) > 0

    def test_split_between_two_owners(self):
        investors = (
            Investor(id="a", annual_income=Decimal("80000"), has_medicare_levy=False),
            Investor(id="b", annual_income=Decimal("80000"), has_medicare_levy=False),
        )
        allocations = (
            OwnershipAllocation("a", Decimal("50")),
            OwnershipAllocation("b", Decimal("50")),
        )
        shares = allocate_year_tax(Decimal("-10000"), investors, allocations)
        assert len(shares) == 2
        assert all(s.allocated_income == Decimal("-5000") for s in shares)
        assert all(s.tax_difference == Decimal("-1625") for s in shares)

    def test_unallocated_investor_skipped(self, sole_investor):
        other = Investor(id="other", annual_income=Decimal("150000"))
        allocations = (OwnershipAllocation("inv-1", Decimal("100")),)
        shares = allocate_year_tax(Decimal("-10000"), (sole_investor, other), allocations)
        assert [s.investor_id for s in shares] == ["inv-1"]

    def test_percentages_applied_as_supplied(self):
        investors = (
            Investor(id="a", annual_income=Decimal("80000"), has_medicare_levy=False),
            Investor(id="b", annual_income=Decimal("80000"), has_medicare_levy=False),
        )
        allocations = (
            OwnershipAllocation("a", Decimal("60")),
            OwnershipAllocation("b", Decimal("60")),
        )
        shares = allocate_year_tax(Decimal("-10000"), investors, allocations)
        assert sum(s.allocated_income for s in shares) == Decimal("-12000")

    def test_base_income_indexed(self, sole_investor):
        allocations = (OwnershipAllocation("inv-1", Decimal("100")),)
        shares = allocate_year_tax(
            Decimal("-10000"), (sole_investor,), allocations, cpi=Decimal("1.1")
        )
        assert shares[0].base_income == Decimal("88000.0")

    def test_no_investors_no_benefit(self):
        assert tax_benefit(Decimal("-10000"), (), ()) == Decimal("0")
