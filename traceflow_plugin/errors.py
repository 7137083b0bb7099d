# traceflow_plugin/errors.py
"""
Error types raised by the Traceflow plugin.

Every error carries a short `kind` string. The RPC layer puts it next to the
message in failed results so the host can tell a bad form apart from an
unreachable cluster.
"""

from typing import Any, Dict, List, Optional


class TraceflowError(Exception):
    """Base class for all plugin errors."""

    kind = "error"

    def to_result(self) -> Dict[str, Any]:
        """Structured failure in the same shape every handler returns."""
        return {
            "success": False,
            "error": str(self),
            "kind": self.kind
        }


class ValidationError(TraceflowError):
    """A required field is missing or the request is malformed."""

    kind = "validation"

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class ConflictError(TraceflowError):
    """A trace request with the same name already exists."""

    kind = "conflict"


class NotFoundError(TraceflowError):
    """No trace request with the given name."""

    kind = "not_found"


class TransportError(TraceflowError):
    """Talking to the Kubernetes API failed."""

    kind = "transport"


class ConfigurationError(TraceflowError):
    """The cluster connection could not be built at startup."""

    kind = "configuration"
