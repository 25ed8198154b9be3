from __future__ import annotations

import logging
import math
from typing import List

from treasury_core.domain.models import (
    DEFAULT_RATE_TABLE,
    Allocation,
    MonthSnapshot,
    RateTable,
    SimulationInput,
    SimulationResult,
    UserProfile,
)
from treasury_core.services.portfolio import blended_rate

logger = logging.getLogger(__name__)


def round2(value: float) -> float:
    """Round half up to cents. Values too large to scale by 100 are returned as is."""
    scaled = value * 100
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / 100


def simulate(sim_input: SimulationInput) -> SimulationResult:
    """
    Deterministic DCA trajectory with monthly compounding.

    Each month the balance grows by annual_rate / 12 and then receives the
    contribution. Snapshot fields are rounded independently for display, month 0
    included, so initial capital with fractions of a cent is reported rounded. The
    running totals are never rounded.
    """
    monthly_rate = sim_input.annual_rate / 12
    contribution = sim_input.monthly_contribution
    logger.debug(
        "simulate capital=%s contribution=%s horizon=%s rate=%s",
        sim_input.initial_capital,
        contribution,
        sim_input.horizon_months,
        sim_input.annual_rate,
    )

    value = sim_input.initial_capital
    contributed = sim_input.initial_capital
    snapshots: List[MonthSnapshot] = [
        MonthSnapshot(month=0, total_value=round2(value), total_contributed=round2(contributed), gain=0.0)
    ]

    for month in range(1, sim_input.horizon_months + 1):
        value = value * (1 + monthly_rate) + contribution
        contributed += contribution
        snapshots.append(
            MonthSnapshot(
                month=month,
                total_value=round2(value),
                total_contributed=round2(contributed),
                gain=round2(value - contributed),
            )
        )

    gain = value - contributed
    total_return = (gain / contributed) * 100 if contributed > 0 else 0.0

    return SimulationResult(
        final_value=round2(value),
        total_contributed=round2(contributed),
        gain=round2(gain),
        total_return_percent=round2(total_return),
        snapshots=snapshots,
        annual_rate=sim_input.annual_rate,
    )


def simulate_portfolio(
    profile: UserProfile,
    allocation: Allocation,
    rates: RateTable = DEFAULT_RATE_TABLE,
) -> SimulationResult:
    """Simulate the whole portfolio at its blended rate. The profile's reserve is not invested."""
    return simulate(
        SimulationInput(
            initial_capital=profile.surplus,
            monthly_contribution=profile.monthly_contribution,
            horizon_months=profile.horizon_months,
            annual_rate=blended_rate(allocation, rates),
        )
    )
