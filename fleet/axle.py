"""Axle class and slot position labels."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from .errors import ValidationError
from .tire import Tire

DUAL_SLOT_LABELS = ("Outer Left", "Inner Left", "Inner Right", "Outer Right")
SINGLE_SLOT_LABELS = ("Left", "Right")


class AxleType(Enum):
    """Descriptive axle role. Only TRACTION is used to pick the X-rotation axle."""

    FRONT = "FRONT"
    TRACTION = "TRACTION"
    TRUCK = "TRUCK"
    TRAILER = "TRAILER"


def slot_label(index: int, slot_count: int) -> str:
    """Human-readable label for a slot on an axle with `slot_count` slots."""
    if slot_count == 2:
        return SINGLE_SLOT_LABELS[index]
    if slot_count == 4:
        return DUAL_SLOT_LABELS[index]
    return f"Slot {index + 1}"


def spare_label(index: int) -> str:
    return f"Spare #{index + 1}"


def axle_position(axle_index: int, label: str) -> str:
    """Display position for a slot, e.g. "Axle 2 - Outer Left"."""
    return f"Axle {axle_index + 1} - {label}"


@dataclass(frozen=True)
class Axle:
    """An axle carrying 2 (single) or 4 (dual) tire slots. None marks an empty slot."""

    id: str
    type: AxleType
    slots: Tuple[Optional[Tire], ...]

    def __post_init__(self):
        object.__setattr__(self, "slots", tuple(self.slots))
        count = len(self.slots)
        if count < 2 or count % 2:
            raise ValidationError(
                f"Axle {self.id}: slot count must be even and at least 2, got {count}"
            )

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    @property
    def is_dual(self) -> bool:
        return self.slot_count == 4

    @property
    def tires(self) -> List[Tire]:
        """Mounted tires, empty slots skipped."""
        return [t for t in self.slots if t is not None]

    def label(self, index: int) -> str:
        return slot_label(index, self.slot_count)

    def with_slot(self, index: int, tire: Optional[Tire]) -> "Axle":
        slots = list(self.slots)
        slots[index] = tire
        return replace(self, slots=tuple(slots))

    def with_slots(self, slots) -> "Axle":
        return replace(self, slots=tuple(slots))
