from __future__ import annotations

import dataclasses
from typing import Dict, List, Optional

import pandas as pd


@dataclasses.dataclass(frozen=True)
class SimulationInput:
    initial_capital: float
    monthly_contribution: float
    horizon_months: int
    annual_rate: float  # 0.08 = 8%


@dataclasses.dataclass(frozen=True)
class MonthSnapshot:
    month: int
    total_value: float
    total_contributed: float
    gain: float


@dataclasses.dataclass
class SimulationResult:
    final_value: float
    total_contributed: float
    gain: float
    total_return_percent: float
    snapshots: List[MonthSnapshot]
    annual_rate: float

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([dataclasses.asdict(s) for s in self.snapshots]).set_index("month")

    def to_dict(self) -> Dict[str, object]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class RateTable:
    bonds: float = 0.045
    dividends: float = 0.07
    stocks: float = 0.10


DEFAULT_RATE_TABLE = RateTable()


@dataclasses.dataclass(frozen=True)
class Allocation:
    bonds: float
    dividends: float
    stocks: float  # weights are not renormalized; callers keep the sum at 1


@dataclasses.dataclass(frozen=True)
class UserProfile:
    surplus: float
    reserve: float
    monthly_contribution: float
    horizon_months: int


RISK_TIERS = ("low", "medium", "high")


@dataclasses.dataclass(frozen=True)
class InstrumentDescriptor:
    id: str
    name: str
    annual_rate: float
    risk: str  # "low" | "medium" | "high"
    min_horizon_months: int
    color: str
    description: str = ""
    source: str = "curated"  # "curated" or "api"
    ticker: Optional[str] = None
    cap_usd: Optional[float] = None
    referral_url: Optional[str] = None

    def __post_init__(self):
        if self.risk not in RISK_TIERS:
            raise ValueError(f"Unknown risk tier for {self.id}: {self.risk}")


@dataclasses.dataclass(frozen=True)
class InstrumentMixEntry:
    instrument_id: str
    percentage: float  # 0..100


@dataclasses.dataclass
class ProjectionSeries:
    instrument_id: str
    label: str
    color: str
    values: List[Optional[float]]  # None marks "no data" before the instrument's minimum horizon
    exceeds_cap: bool = False


@dataclasses.dataclass
class AllocationComparison:
    baseline: SimulationResult
    candidate: SimulationResult
    delta: List[float]
