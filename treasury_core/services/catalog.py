from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from treasury_core.domain.models import InstrumentDescriptor

MILESTONE_STEPS = (3, 6, 12)
MILESTONE_RANGE_END = 36


class InstrumentCatalog:
    """
    Read-only lookup over a fixed set of instruments.

    Built once from an iterable of descriptors; there is no mutation API.
    """

    def __init__(self, instruments: Iterable[InstrumentDescriptor]):
        items: Tuple[InstrumentDescriptor, ...] = tuple(instruments)
        index: Dict[str, InstrumentDescriptor] = {}
        for item in items:
            if item.id in index:
                raise ValueError(f"Duplicate instrument id in catalog: {item.id}")
            index[item.id] = item
        self._items = items
        self._index = index

    def find(self, instrument_id: str) -> Optional[InstrumentDescriptor]:
        return self._index.get(instrument_id)

    def ids(self) -> List[str]:
        return [i.id for i in self._items]

    def __iter__(self) -> Iterator[InstrumentDescriptor]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, instrument_id: object) -> bool:
        return instrument_id in self._index


# Annual rates are historical estimates, not guarantees. Review quarterly.
DEFAULT_INSTRUMENTS = (
    InstrumentDescriptor(
        id="tenpo",
        name="Tenpo Control",
        description="Digital savings account. Money stays available and earns interest daily.",
        annual_rate=0.07,
        source="curated",
        color="#00FF88",
        risk="low",
        min_horizon_months=3,
        cap_usd=5500.0,  # premium rate applies up to ~5M CLP
    ),
    InstrumentDescriptor(
        id="mercadopago",
        name="MercadoPago",
        description="Interest-bearing account with immediate liquidity.",
        annual_rate=0.08,
        source="curated",
        color="#3B82F6",
        risk="low",
        min_horizon_months=3,
    ),
    InstrumentDescriptor(
        id="fintual",
        name="Fintual Moderado",
        description="Diversified mutual fund. More return than a savings account, with more variation.",
        annual_rate=0.08,
        source="curated",
        color="#A855F7",
        risk="medium",
        # short-term fund volatility is noise, not return
        min_horizon_months=6,
    ),
    InstrumentDescriptor(
        id="agg",
        name="ETF AGG",
        description="High-quality US bond fund. Stable, suited to protecting capital.",
        annual_rate=0.045,
        source="api",
        ticker="AGG",
        color="#F59E0B",
        risk="low",
        min_horizon_months=3,
    ),
    InstrumentDescriptor(
        id="vti",
        name="ETF VTI",
        description="Tracks the whole US stock market. High long-term potential.",
        annual_rate=0.10,
        source="api",
        ticker="VTI",
        color="#EF4444",
        risk="high",
        min_horizon_months=3,
    ),
)

DEFAULT_CATALOG = InstrumentCatalog(DEFAULT_INSTRUMENTS)


def milestone_months(step: int) -> List[int]:
    """
    Milestones over the fixed 3..36 month range at the given step.

    milestone_months(12) -> [12, 24, 36]
    milestone_months(6)  -> [6, 12, 18, 24, 30, 36]
    """
    if step not in MILESTONE_STEPS:
        raise ValueError(f"Milestone step must be one of {MILESTONE_STEPS}, got {step}")
    return list(range(step, MILESTONE_RANGE_END + 1, step))
