from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from treasury_core.domain.errors import EmptyMixError, InvalidHorizonSetError, UnknownInstrumentError
from treasury_core.domain.models import (
    InstrumentDescriptor,
    InstrumentMixEntry,
    ProjectionSeries,
    SimulationInput,
)
from treasury_core.services import simulator
from treasury_core.services.catalog import DEFAULT_CATALOG, InstrumentCatalog

logger = logging.getLogger(__name__)

# Annualized returns are not comparable before ~90 days.
MIN_MILESTONE_MONTHS = 3


def _valid_milestones(milestones: Iterable[int]) -> List[int]:
    points = set()
    for m in milestones:
        if m != int(m):
            raise ValueError(f"Milestone months must be whole numbers, got {m!r}")
        if m >= MIN_MILESTONE_MONTHS:
            points.add(int(m))
    return sorted(points)


def project_mix(
    capital: float,
    monthly_contribution: float,
    mix: Sequence[InstrumentMixEntry],
    milestones: Iterable[int],
    catalog: InstrumentCatalog = DEFAULT_CATALOG,
) -> List[ProjectionSeries]:
    """
    Projects each active instrument of a mix separately and samples it at the milestones.

    - Milestones below 3 months are dropped; the rest are de-duplicated and sorted.
    - Entries with a zero percentage are ignored.
    - Each instrument receives its share of capital and contribution and compounds at its own rate.
    - A milestone below the instrument's minimum horizon yields None instead of a value.

    Every input check runs before the first simulation, so a failure never leaves partial output.
    """
    points = _valid_milestones(milestones)
    if not points:
        raise InvalidHorizonSetError(MIN_MILESTONE_MONTHS)

    active = [entry for entry in mix if entry.percentage > 0]
    if not active:
        raise EmptyMixError()

    resolved: List[Tuple[InstrumentMixEntry, InstrumentDescriptor]] = []
    for entry in active:
        instrument = catalog.find(entry.instrument_id)
        if instrument is None:
            raise UnknownInstrumentError(entry.instrument_id)
        resolved.append((entry, instrument))

    horizon_max = points[-1]
    series: List[ProjectionSeries] = []
    for entry, instrument in resolved:
        share = entry.percentage / 100
        allocated = capital * share
        result = simulator.simulate(
            SimulationInput(
                initial_capital=allocated,
                monthly_contribution=monthly_contribution * share,
                horizon_months=horizon_max,
                annual_rate=instrument.annual_rate,
            )
        )

        floor = max(MIN_MILESTONE_MONTHS, instrument.min_horizon_months)
        values = [result.snapshots[h].total_value if h >= floor else None for h in points]

        exceeds_cap = instrument.cap_usd is not None and allocated > instrument.cap_usd
        if exceeds_cap:
            logger.warning(
                "Allocation %.2f to %s exceeds its %.2f cap; projection assumes the full rate",
                allocated,
                instrument.id,
                instrument.cap_usd,
            )

        series.append(
            ProjectionSeries(
                instrument_id=instrument.id,
                label=instrument.name,
                color=instrument.color,
                values=values,
                exceeds_cap=exceeds_cap,
            )
        )

    return series


def projection_milestones(milestones: Iterable[int]) -> List[int]:
    """The milestone axis that project_mix aligns its values to."""
    return _valid_milestones(milestones)
