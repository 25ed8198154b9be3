from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from treasury_core.domain.models import (
    Allocation,
    InstrumentDescriptor,
    InstrumentMixEntry,
    RateTable,
    UserProfile,
)
from treasury_core.services.catalog import InstrumentCatalog

_DEFAULT_RATES = RateTable()


def load_rate_table(path: str | Path) -> RateTable:
    data = _read_json(path)
    return RateTable(
        bonds=float(data.get("bonds", _DEFAULT_RATES.bonds)),
        dividends=float(data.get("dividends", _DEFAULT_RATES.dividends)),
        stocks=float(data.get("stocks", _DEFAULT_RATES.stocks)),
    )


def load_profile(path: str | Path) -> UserProfile:
    return profile_from_dict(_read_json(path))


def load_allocation(path: str | Path) -> Allocation:
    return allocation_from_dict(_read_json(path))


def load_mix(path: str | Path) -> List[InstrumentMixEntry]:
    data = _read_json(path)
    entries = data.get("mix", []) if isinstance(data, dict) else data
    return [
        InstrumentMixEntry(instrument_id=str(e["instrument_id"]), percentage=float(e.get("percentage", 0.0)))
        for e in entries
    ]


def load_catalog(path: str | Path) -> InstrumentCatalog:
    """
    Reads a JSON list of instruments (or {"instruments": [...]}).
    Required keys: id, name, annual_rate, risk, min_horizon_months, color.
    """
    data = _read_json(path)
    rows = data.get("instruments", []) if isinstance(data, dict) else data
    instruments = []
    for row in rows:
        missing = {"id", "name", "annual_rate", "risk", "min_horizon_months", "color"} - set(row)
        if missing:
            raise ValueError(f"Missing keys in catalog entry {row.get('id', '?')}: {missing}")
        cap = row.get("cap_usd")
        instruments.append(
            InstrumentDescriptor(
                id=str(row["id"]),
                name=str(row["name"]),
                annual_rate=float(row["annual_rate"]),
                risk=str(row["risk"]),
                min_horizon_months=int(row["min_horizon_months"]),
                color=str(row["color"]),
                description=row.get("description", ""),
                source=row.get("source", "curated"),
                ticker=row.get("ticker"),
                cap_usd=float(cap) if cap is not None else None,
                referral_url=row.get("referral_url"),
            )
        )
    return InstrumentCatalog(instruments)


def profile_from_dict(data: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        surplus=float(data.get("surplus", 0.0)),
        reserve=float(data.get("reserve", 0.0)),
        monthly_contribution=float(data.get("monthly_contribution", 0.0)),
        horizon_months=int(data.get("horizon_months", 12)),
    )


def allocation_from_dict(data: Dict[str, Any]) -> Allocation:
    return Allocation(
        bonds=float(data.get("bonds", 0.0)),
        dividends=float(data.get("dividends", 0.0)),
        stocks=float(data.get("stocks", 0.0)),
    )


def _read_json(path: str | Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
