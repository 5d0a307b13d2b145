"""Custom error types for SOWSmith."""

from typing import Dict, List, Optional


class SOWSmithError(Exception):
    """Base error for SOWSmith operations."""
    pass


class DiscoveryValidationError(SOWSmithError):
    """Discovery input failed schema checks; generation is aborted."""

    def __init__(self, message: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.field_errors = field_errors or []

    @classmethod
    def from_pydantic(cls, exc) -> "DiscoveryValidationError":
        """Build from a pydantic ValidationError, keeping field-level detail."""
        field_errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        fields = ", ".join(e["field"] for e in field_errors) or "unknown"
        return cls(f"Invalid discovery input ({fields})", field_errors)


class GenerationBackendError(SOWSmithError):
    """External drafting call failed or returned unusable content."""

    def __init__(self, message: str, provider: str = None):
        super().__init__(message)
        self.provider = provider


class StorageError(SOWSmithError):
    """Workspace persistence read or write failed."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


class StatusTransitionError(SOWSmithError):
    """Document status may only move forward (Draft -> In Review -> Approved)."""

    def __init__(self, message: str, current: str = None, requested: str = None):
        super().__init__(message)
        self.current = current
        self.requested = requested
