from __future__ import annotations

import numpy as np

from treasury_core.domain.models import (
    DEFAULT_RATE_TABLE,
    Allocation,
    AllocationComparison,
    RateTable,
    UserProfile,
)
from treasury_core.services import simulator


def compare_allocations(
    profile: UserProfile,
    baseline: Allocation,
    candidate: Allocation,
    rates: RateTable = DEFAULT_RATE_TABLE,
) -> AllocationComparison:
    baseline_result = simulator.simulate_portfolio(profile, baseline, rates)
    candidate_result = simulator.simulate_portfolio(profile, candidate, rates)

    base = np.array([s.total_value for s in baseline_result.snapshots], dtype=float)
    cand = np.array([s.total_value for s in candidate_result.snapshots], dtype=float)
    delta = np.round(cand - base, 2).tolist()

    return AllocationComparison(
        baseline=baseline_result,
        candidate=candidate_result,
        delta=delta,
    )
