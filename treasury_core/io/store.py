from __future__ import annotations

import dataclasses
import datetime as dt
import json
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from treasury_core.domain.models import Allocation, UserProfile
from treasury_core.io.config import allocation_from_dict, profile_from_dict


def default_store_root() -> Path:
    return Path.home() / ".treasury_store"


@dataclasses.dataclass
class SimulationRecord:
    id: str
    profile: UserProfile
    allocation: Allocation
    created_at: str


class ProfileStore:
    """
    Local JSON persistence of profiles, allocations and simulation history.

    One document per user id under the store root:
    {"profile": {...}, "portfolio": {...}, "simulations": [...]}
    """

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root) if root is not None else default_store_root()

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        doc = self._read(user_id)
        doc["profile"] = {**dataclasses.asdict(profile), "updated_at": _now()}
        self._write(user_id, doc)

    def load_profile(self, user_id: str) -> Optional[UserProfile]:
        data = self._read(user_id).get("profile")
        return profile_from_dict(data) if data else None

    def save_allocation(self, user_id: str, allocation: Allocation) -> None:
        doc = self._read(user_id)
        doc["portfolio"] = {**dataclasses.asdict(allocation), "updated_at": _now()}
        self._write(user_id, doc)

    def load_allocation(self, user_id: str) -> Optional[Allocation]:
        data = self._read(user_id).get("portfolio")
        return allocation_from_dict(data) if data else None

    def save_simulation(self, user_id: str, profile: UserProfile, allocation: Allocation) -> str:
        doc = self._read(user_id)
        record_id = uuid.uuid4().hex
        doc.setdefault("simulations", []).append(
            {
                "id": record_id,
                "profile": dataclasses.asdict(profile),
                "allocation": dataclasses.asdict(allocation),
                "created_at": _now(),
            }
        )
        self._write(user_id, doc)
        return record_id

    def load_simulations(self, user_id: str) -> List[SimulationRecord]:
        """Newest first."""
        rows = self._read(user_id).get("simulations", [])
        records = [
            SimulationRecord(
                id=row["id"],
                profile=profile_from_dict(row["profile"]),
                allocation=allocation_from_dict(row["allocation"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]
        records.reverse()
        return records

    def _path(self, user_id: str) -> Path:
        if not user_id:
            raise ValueError("user_id must not be empty")
        return self.root / f"{_file_stem(user_id)}.json"

    def _read(self, user_id: str) -> Dict[str, Any]:
        p = self._path(user_id)
        if not p.exists():
            return {}
        return json.loads(p.read_text(encoding="utf-8"))

    def _write(self, user_id: str, doc: Dict[str, Any]) -> None:
        p = self._path(user_id)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(doc, indent=2), encoding="utf-8")


def _file_stem(user_id: str) -> str:
    # one file per id: "%" is itself encoded, so "%2E" can only come from "."
    return quote(user_id, safe="").replace(".", "%2E")


def _now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()
