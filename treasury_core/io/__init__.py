from treasury_core.io.config import (  # noqa: F401
    load_allocation,
    load_catalog,
    load_mix,
    load_profile,
    load_rate_table,
)
from treasury_core.io.export import projection_frame, trajectory_frame, write_csv  # noqa: F401
from treasury_core.io.store import ProfileStore  # noqa: F401

__all__ = [
    "load_allocation",
    "load_catalog",
    "load_mix",
    "load_profile",
    "load_rate_table",
    "projection_frame",
    "trajectory_frame",
    "write_csv",
    "ProfileStore",
]
