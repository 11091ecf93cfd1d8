"""Tests for decline and tolerance predicates across dimension sets."""

import pytest

from exitvoice.engine.predicates import is_declining, tolerates
from exitvoice.models.organization import Dimension, Limiters, Organization, Tolerance

QUALITY = frozenset({Dimension.QUALITY})
PRICE = frozenset({Dimension.PRICE})
BOTH = frozenset({Dimension.QUALITY, Dimension.PRICE})


class TestIsDeclining:
    def test_quality_only_below_limiter(self) -> None:
        org = Organization(quality=1, price=100)
        assert is_declining(org, Limiters(quality=2, price=0), QUALITY)

    def test_quality_only_at_limiter_not_declining(self) -> None:
        org = Organization(quality=2)
        assert not is_declining(org, Limiters(quality=2), QUALITY)

    def test_quality_only_ignores_price(self) -> None:
        """Price far above the ceiling is irrelevant with QUALITY only."""
        org = Organization(quality=5, price=100)
        assert not is_declining(org, Limiters(quality=2, price=1), QUALITY)

    def test_price_only_above_ceiling(self) -> None:
        org = Organization(quality=0, price=5)
        assert is_declining(org, Limiters(quality=10, price=4), PRICE)

    def test_price_only_ignores_quality(self) -> None:
        org = Organization(quality=0, price=4)
        assert not is_declining(org, Limiters(quality=10, price=4), PRICE)

    def test_both_requires_both_signals(self) -> None:
        limiters = Limiters(quality=2, price=4)
        assert is_declining(Organization(quality=1, price=5), limiters, BOTH)
        assert not is_declining(Organization(quality=1, price=4), limiters, BOTH)
        assert not is_declining(Organization(quality=2, price=5), limiters, BOTH)

    def test_order_of_dimensions_is_irrelevant(self) -> None:
        org = Organization(quality=1, price=5)
        limiters = Limiters(quality=2, price=4)
        a = frozenset([Dimension.PRICE, Dimension.QUALITY])
        b = frozenset([Dimension.QUALITY, Dimension.PRICE])
        assert is_declining(org, limiters, a) == is_declining(org, limiters, b)


class TestTolerates:
    def test_quality_within_tolerance(self) -> None:
        org = Organization(quality=2)
        assert tolerates(org, Limiters(quality=3), QUALITY, Tolerance(quality=1))

    def test_quality_beyond_tolerance(self) -> None:
        org = Organization(quality=1)
        assert not tolerates(org, Limiters(quality=3), QUALITY, Tolerance(quality=1))

    def test_zero_tolerance_on_declining_org(self) -> None:
        org = Organization(quality=1)
        assert not tolerates(org, Limiters(quality=2), QUALITY, Tolerance())

    def test_tolerance_larger_than_limiter(self) -> None:
        """The acceptance floor may go below zero; everything is tolerated."""
        org = Organization(quality=0)
        assert tolerates(org, Limiters(quality=1), QUALITY, Tolerance(quality=5))

    def test_price_tolerance_tightens_ceiling(self) -> None:
        """Price is tolerated only up to limiters.price - tolerance.price."""
        limiters = Limiters(price=10)
        tolerance = Tolerance(price=3)
        assert tolerates(Organization(quality=0, price=7), limiters, PRICE, tolerance)
        assert not tolerates(Organization(quality=0, price=8), limiters, PRICE, tolerance)

    def test_price_only_ignores_quality(self) -> None:
        org = Organization(quality=0, price=1)
        assert tolerates(org, Limiters(quality=10, price=5), PRICE, Tolerance())

    @pytest.mark.parametrize(
        "quality, price, expected",
        [
            (2, 4, True),
            (1, 4, False),
            (2, 5, False),
            (1, 5, False),
        ],
    )
    def test_both_requires_both(self, quality, price, expected) -> None:
        org = Organization(quality=quality, price=price)
        limiters = Limiters(quality=3, price=5)
        tolerance = Tolerance(quality=1, price=1)
        assert tolerates(org, limiters, BOTH, tolerance) is expected
