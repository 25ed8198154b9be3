from treasury_core.domain.errors import (  # noqa: F401
    EmptyMixError,
    InvalidHorizonSetError,
    ProjectionError,
    UnknownInstrumentError,
)
from treasury_core.domain.models import (  # noqa: F401
    DEFAULT_RATE_TABLE,
    Allocation,
    AllocationComparison,
    InstrumentDescriptor,
    InstrumentMixEntry,
    MonthSnapshot,
    ProjectionSeries,
    RateTable,
    SimulationInput,
    SimulationResult,
    UserProfile,
)

__all__ = [
    "DEFAULT_RATE_TABLE",
    "Allocation",
    "AllocationComparison",
    "EmptyMixError",
    "InstrumentDescriptor",
    "InstrumentMixEntry",
    "InvalidHorizonSetError",
    "MonthSnapshot",
    "ProjectionError",
    "ProjectionSeries",
    "RateTable",
    "SimulationInput",
    "SimulationResult",
    "UnknownInstrumentError",
    "UserProfile",
]
