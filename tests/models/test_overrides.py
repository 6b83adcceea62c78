from decimal import Decimal

import pytest

from propcast.models.overrides import Auto, Manual, from_triplet, resolve


class TestFromTriplet:
    def test_auto(self):
        assert from_triplet("auto", Decimal("500"), Decimal("600")) == Auto(Decimal("500"))

    def test_manual(self):
        assert from_triplet("manual", Decimal("500"), Decimal("600")) == Manual(Decimal("600"))

    def test_manual_mode_without_value_falls_back(self):
        assert from_triplet("manual", Decimal("500"), None) == Auto(Decimal("500"))

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            from_triplet("estimated", Decimal("500"))


class TestResolve:
    def test_values(self):
        assert resolve(Auto(Decimal("3"))) == Decimal("3")
        assert resolve(Manual(Decimal("4"))) == Decimal("4")

    def test_missing_uses_default(self):
        assert resolve(Auto()) == Decimal("0")
        assert resolve(None, Decimal("2.5")) == Decimal("2.5")

    def test_zero_is_a_value(self):
        assert resolve(Manual(Decimal("0")), Decimal("2.5")) == Decimal("0")
