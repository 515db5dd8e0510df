"""Exception types raised by the transit service."""
from typing import List, Optional


class TransitFlowError(Exception):
    """Base class for all service errors."""


class ValidationFailed(TransitFlowError):
    """Input rejected before any store call was attempted."""

    def __init__(self, result, message: Optional[str] = None):
        self.result = result
        super().__init__(message or "; ".join(f"{e.field}: {e.message}" for e in result.errors))


class GeocodingError(TransitFlowError):
    """One or more addresses could not be resolved inside the configured region."""

    def __init__(self, failed: List[str]):
        self.failed = failed
        super().__init__(f"Could not resolve {' and '.join(failed)} address")


class UnsupportedStatusTransition(TransitFlowError):
    """Raised when toggling a route whose status is neither open nor blocked."""

    def __init__(self, route_id: str, status: str):
        self.route_id = route_id
        self.status = status
        super().__init__(f"Toggling is not supported for route {route_id} with status '{status}'")


class ConfigurationError(TransitFlowError):
    """Map provider credentials are missing."""


class ProviderError(TransitFlowError):
    """The mapping provider could not be reached or answered with an error status."""


class InvalidTransition(TransitFlowError):
    """Operation not allowed in the current segment-creation state."""
