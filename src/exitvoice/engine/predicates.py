"""Decline and tolerance predicates.

Which dimensions count is controlled by the membership's dimension set:
- QUALITY only: price is ignored.
- QUALITY and PRICE: both must signal.
- PRICE only: quality is ignored.

Price tolerance is computed as limiters.price - tolerance.price, which
tightens the price ceiling rather than loosening it. This is the
established model arithmetic and is kept as-is.
"""

from __future__ import annotations

from typing import AbstractSet

from exitvoice.models.organization import Dimension, Limiters, Organization, Tolerance


def _combine(dimensions: AbstractSet[Dimension], quality: bool, price: bool) -> bool:
    if Dimension.PRICE not in dimensions:
        return quality
    if Dimension.QUALITY in dimensions:
        return quality and price
    return price


def is_declining(
    org: Organization,
    limiters: Limiters,
    dimensions: AbstractSet[Dimension],
) -> bool:
    """True if the organization has crossed the limiters on the relevant dimensions."""
    quality_declining = org.quality < limiters.quality
    price_declining = org.price > limiters.price
    return _combine(dimensions, quality_declining, price_declining)


def tolerates(
    org: Organization,
    limiters: Limiters,
    dimensions: AbstractSet[Dimension],
    tolerance: Tolerance,
) -> bool:
    """True if the member accepts the organization's decline without acting."""
    quality_tolerated = org.quality >= limiters.quality - tolerance.quality
    price_tolerated = org.price <= limiters.price - tolerance.price
    return _combine(dimensions, quality_tolerated, price_tolerated)
