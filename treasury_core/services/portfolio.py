from __future__ import annotations

from treasury_core.domain.models import DEFAULT_RATE_TABLE, Allocation, RateTable, UserProfile

# (upper bound in months, allocation); the last tier is open-ended
_ALLOCATION_TIERS = (
    (12, Allocation(bonds=0.80, dividends=0.15, stocks=0.05)),
    (36, Allocation(bonds=0.60, dividends=0.25, stocks=0.15)),
    (60, Allocation(bonds=0.40, dividends=0.35, stocks=0.25)),
)
_LONG_TERM_ALLOCATION = Allocation(bonds=0.20, dividends=0.40, stocks=0.40)


def blended_rate(allocation: Allocation, rates: RateTable = DEFAULT_RATE_TABLE) -> float:
    """
    Weighted annual rate of a three-class allocation.
    Weights are used as given, so an allocation that does not sum to 1 scales the rate.
    """
    return (
        allocation.bonds * rates.bonds
        + allocation.dividends * rates.dividends
        + allocation.stocks * rates.stocks
    )


def suggest_allocation(profile: UserProfile) -> Allocation:
    """
    Step policy on the horizon only: the longer the horizon, the more equity.
    A horizon equal to a tier bound belongs to that tier.
    """
    for upper, allocation in _ALLOCATION_TIERS:
        if profile.horizon_months <= upper:
            return allocation
    return _LONG_TERM_ALLOCATION
