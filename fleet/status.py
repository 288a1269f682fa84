"""TireStatus enum for wear classification."""

from enum import Enum


class TireStatus(Enum):
    """Tire wear categories. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2  # Reserved, no classification rule produces it
    GOOD = 3  # Half-life
    NEW = 4

    @property
    def label(self) -> str:
        return {
            TireStatus.CRITICAL: "Critical",
            TireStatus.WARNING: "Warning",
            TireStatus.GOOD: "Half-life",
            TireStatus.NEW: "New",
        }[self]
