from typing import Any, Dict
from pydantic import BaseModel, Field


class TraceRequest(BaseModel):
    """A request to trace connectivity from one pod to another."""
    name: str
    source_namespace: str
    source_pod: str
    destination_namespace: str
    destination_pod: str
    # Written by the cluster after creation, never by the plugin
    status: Dict[str, Any] = Field(default_factory=dict)

    @property
    def source(self) -> str:
        return f"{self.source_namespace}/{self.source_pod}"

    @property
    def destination(self) -> str:
        return f"{self.destination_namespace}/{self.destination_pod}"

    def to_resource(self, api_version: str) -> Dict[str, Any]:
        """Build the Traceflow custom resource body for a create call."""
        return {
            "apiVersion": api_version,
            "kind": "Traceflow",
            "metadata": {"name": self.name},
            "srcNamespace": self.source_namespace,
            "srcPod": self.source_pod,
            "dstNamespace": self.destination_namespace,
            "dstPod": self.destination_pod,
            # Everything else stays at its zero value
            "dstService": "",
            "roundID": "",
            "packet": {},
            "status": {}
        }

    @classmethod
    def from_resource(cls, item: Dict[str, Any]) -> "TraceRequest":
        """Parse a Traceflow custom resource returned by the API server."""
        metadata = item.get("metadata", {})
        return cls(
            name=metadata.get("name", ""),
            source_namespace=item.get("srcNamespace", ""),
            source_pod=item.get("srcPod", ""),
            destination_namespace=item.get("dstNamespace", ""),
            destination_pod=item.get("dstPod", ""),
            status=item.get("status") or {}
        )


class ResourceLink(BaseModel):
    text: str
    ref: str


class TraceRow(BaseModel):
    """One line of the trace list table."""
    name: str
    source_namespace: str
    source_pod: str
    destination_namespace: str
    destination_pod: str
    detail: ResourceLink
