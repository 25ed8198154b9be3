from treasury_core.services.catalog import DEFAULT_CATALOG, InstrumentCatalog, milestone_months  # noqa: F401
from treasury_core.services.pipeline import compare_allocations  # noqa: F401
from treasury_core.services.portfolio import blended_rate, suggest_allocation  # noqa: F401
from treasury_core.services.projector import project_mix  # noqa: F401
from treasury_core.services.simulator import simulate, simulate_portfolio  # noqa: F401

__all__ = [
    "DEFAULT_CATALOG",
    "InstrumentCatalog",
    "milestone_months",
    "compare_allocations",
    "blended_rate",
    "suggest_allocation",
    "project_mix",
    "simulate",
    "simulate_portfolio",
]
