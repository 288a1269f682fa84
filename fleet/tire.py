"""Tire class - a single tire identified by its fire number."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .calculations import calc_cpk, classify_tire, is_finite_number
from .errors import ValidationError
from .maintenance_record import MaintenanceRecord, RecordKind
from .status import TireStatus

EDITABLE_FIELDS = (
    "brand",
    "model",
    "dot",
    "size",
    "purchase_price",
    "purchase_date",
    "payment_method",
    "store",
    "current_km",
)


@dataclass(frozen=True)
class Tire:
    """
    A tire with its purchase data, usage and maintenance history.

    Values are immutable; the `with_*` helpers return updated copies.
    `status` is derived from usage and history on every read and is never
    stored. `position` is a display label written by the rotation engine,
    not a source of truth for where the tire is.
    """

    id: str
    brand: str = ""
    model: str = ""
    dot: str = ""
    size: str = ""
    purchase_date: Optional[str] = None
    purchase_price: float = 0
    payment_method: Optional[str] = None
    store: Optional[str] = None
    initial_km: float = 0
    current_km: float = 0
    tread_depth_mm: float = 0
    pressure_psi: Optional[float] = None
    position: str = ""
    history: Tuple[MaintenanceRecord, ...] = ()

    def __post_init__(self):
        if not self.id:
            raise ValidationError("Tire id (fire number) is required")
        for field in ("initial_km", "current_km", "tread_depth_mm"):
            value = getattr(self, field)
            if not is_finite_number(value):
                raise ValidationError(
                    f"Tire {self.id}: {field} must be a finite number, got {value!r}"
                )
        if self.pressure_psi is not None and not is_finite_number(self.pressure_psi):
            raise ValidationError(
                f"Tire {self.id}: pressure must be a finite number, "
                f"got {self.pressure_psi!r}"
            )
        if self.initial_km < 0:
            raise ValidationError(f"Tire {self.id}: initial km cannot be negative")
        if self.current_km < self.initial_km:
            raise ValidationError(
                f"Tire {self.id}: current km {self.current_km:,.0f} is below "
                f"initial km {self.initial_km:,.0f}"
            )
        if self.tread_depth_mm < 0:
            raise ValidationError(f"Tire {self.id}: tread depth cannot be negative")
        # Lists from callers are frozen so history stays append-only
        object.__setattr__(self, "history", tuple(self.history))

    @property
    def km_run(self) -> float:
        return self.current_km - self.initial_km

    @property
    def retread_count(self) -> int:
        return sum(1 for h in self.history if h.kind == RecordKind.RETREAD)

    @property
    def has_structural_damage(self) -> bool:
        return any(h.is_structural_damage for h in self.history)

    @property
    def status(self) -> TireStatus:
        return classify_tire(self)

    @property
    def cpk(self) -> float:
        """Purchase price per kilometer run."""
        return calc_cpk(self.purchase_price, self.km_run)

    @property
    def maintenance_cost(self) -> float:
        return sum(h.cost for h in self.history)

    @property
    def rotations(self) -> Tuple[MaintenanceRecord, ...]:
        return tuple(h for h in self.history if h.kind == RecordKind.ROTATION)

    @property
    def last_record(self) -> Optional[MaintenanceRecord]:
        return self.history[-1] if self.history else None

    def with_record(self, record: MaintenanceRecord) -> "Tire":
        return replace(self, history=self.history + (record,))

    def with_km(self, current_km: float) -> "Tire":
        return replace(self, current_km=current_km)

    def with_tread_depth(self, depth_mm: float) -> "Tire":
        return replace(self, tread_depth_mm=depth_mm)

    def with_position(self, position: str) -> "Tire":
        return replace(self, position=position)

    def with_pressure(self, pressure_psi: float) -> "Tire":
        return replace(self, pressure_psi=pressure_psi)

    def with_changes(self, **fields) -> "Tire":
        """Copy with edited descriptive fields (see EDITABLE_FIELDS)."""
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Cannot edit tire field(s): {', '.join(sorted(unknown))}"
            )
        return replace(self, **fields)
