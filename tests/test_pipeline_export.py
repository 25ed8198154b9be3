import math
from pathlib import Path

import pandas as pd
import pytest

from treasury_core.domain.models import Allocation, InstrumentMixEntry, UserProfile
from treasury_core.io import export as export_io
from treasury_core.services.pipeline import compare_allocations
from treasury_core.services.portfolio import suggest_allocation
from treasury_core.services.projector import project_mix


def test_compare_allocations_delta_per_month():
    profile = UserProfile(surplus=10000, reserve=0, monthly_contribution=500, horizon_months=24)
    baseline = suggest_allocation(profile)
    candidate = Allocation(bonds=0, dividends=0, stocks=1)
    result = compare_allocations(profile, baseline, candidate)

    assert len(result.delta) == 25
    assert result.delta[0] == 0
    assert all(d >= 0 for d in result.delta)
    assert result.delta[-1] == pytest.approx(result.candidate.final_value - result.baseline.final_value, abs=0.011)


def test_trajectory_csv(tmp_path: Path):
    profile = UserProfile(surplus=1000, reserve=0, monthly_contribution=100, horizon_months=3)
    result = compare_allocations(profile, Allocation(1, 0, 0), Allocation(0, 0, 1)).baseline
    out = export_io.write_csv(export_io.trajectory_frame(result), tmp_path / "out" / "trajectory.csv")
    frame = pd.read_csv(out)
    assert list(frame.columns) == ["month", "total_value", "total_contributed", "gain"]
    assert len(frame) == 4


def test_projection_frame_keeps_missing_points():
    mix = [InstrumentMixEntry("fintual", 50), InstrumentMixEntry("vti", 50)]
    series = project_mix(2000, 100, mix, [3, 6])
    frame = export_io.projection_frame(series, [3, 6])
    assert list(frame.columns) == ["Fintual Moderado", "ETF VTI"]
    assert math.isnan(frame.loc[3, "Fintual Moderado"])
    assert frame.loc[6, "Fintual Moderado"] > 1000
    assert frame.loc[3, "ETF VTI"] > 1000
