from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

from treasury_core.domain.models import ProjectionSeries, SimulationResult


def trajectory_frame(result: SimulationResult) -> pd.DataFrame:
    return result.to_frame()


def projection_frame(series: Sequence[ProjectionSeries], milestones: Iterable[int]) -> pd.DataFrame:
    """
    One column per instrument, one row per milestone month.
    Missing points stay missing (NaN in the frame, empty in CSV).
    """
    index: List[int] = list(milestones)
    data = {s.label: pd.Series(s.values, index=index, dtype="float64") for s in series}
    frame = pd.DataFrame(data, index=pd.Index(index, name="month"))
    return frame


def write_csv(frame: pd.DataFrame, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(out)
    return out
