"""Exception hierarchy for fleet operations."""


class FleetError(Exception):
    """Base class for every error raised by the fleet package."""


class ValidationError(FleetError, ValueError):
    """Malformed input to a state transition. Nothing was changed."""


class InvalidStateTransition(FleetError):
    """Operation not allowed in the truck's current trip state."""


class TireNotFound(FleetError, LookupError):
    """No tire with the given fire number is mounted or carried as a spare."""

    def __init__(self, tire_id: str):
        self.tire_id = tire_id
        super().__init__(f"Tire '{tire_id}' not found")


class ExternalCapabilityFailure(FleetError):
    """An optional external capability failed or returned unusable data."""

    def __init__(self, capability: str, message: str):
        self.capability = capability
        super().__init__(f"{capability}: {message}")
