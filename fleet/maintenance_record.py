"""MaintenanceRecord class for tire history events."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class RecordKind(Enum):
    """Kinds of events logged against a tire."""

    PUNCTURE = "PUNCTURE"
    BUBBLE = "BUBBLE"
    IRREGULAR_WEAR = "IRREGULAR_WEAR"
    RETREAD = "RETREAD"
    ROTATION = "ROTATION"
    PRESSURE = "PRESSURE"
    OTHER = "OTHER"
    CUT = "CUT"
    BLOWOUT = "BLOWOUT"


# Damage that takes a carcass out of service regardless of wear
STRUCTURAL_DAMAGE = frozenset({RecordKind.BUBBLE, RecordKind.BLOWOUT, RecordKind.CUT})


def new_record_id() -> str:
    """Short random id for a new record."""
    return uuid.uuid4().hex[:9]


def now_iso() -> str:
    """Current local time as an ISO-8601 string (seconds precision)."""
    return datetime.now().isoformat(timespec="seconds")


@dataclass(frozen=True)
class MaintenanceRecord:
    """An event in a tire's history. Records are only ever appended."""

    id: str
    date: str
    kind: RecordKind
    description: str = ""
    cost: float = 0

    @classmethod
    def create(
        cls,
        kind: RecordKind,
        description: str = "",
        cost: float = 0,
        when: Optional[str] = None,
    ) -> "MaintenanceRecord":
        """Build a record with a fresh id, stamped now unless `when` is given."""
        return cls(
            id=new_record_id(),
            date=when or now_iso(),
            kind=kind,
            description=description,
            cost=cost,
        )

    @property
    def is_structural_damage(self) -> bool:
        return self.kind in STRUCTURAL_DAMAGE
