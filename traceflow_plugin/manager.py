# traceflow_plugin/manager.py
"""
Trace Request Manager

Maps user-submitted trace requests onto the Traceflow custom resource
lifecycle: submit creates a resource, get_by_name and list_all read them
back. Errors are raised as TraceflowError subclasses and never retried.
"""

import logging
from typing import Iterator, List, Optional

from .errors import ValidationError
from .k8s_tools.traceflow_store import TraceflowStore
from .models import ResourceLink, TraceRequest, TraceRow
from .settings import settings

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "name",
    "source_namespace",
    "source_pod",
    "destination_namespace",
    "destination_pod",
)


def _blank(value) -> bool:
    """Form values must be non-empty strings; anything else counts as missing."""
    return not isinstance(value, str) or not value.strip()


class TraceRequestListing:
    """
    Lazy view over every trace request in the cluster.

    Nothing is fetched until iteration starts, and each new iteration lists
    the cluster again, so a failed pass can simply be retried.
    """

    def __init__(self, store: TraceflowStore):
        self._store = store

    def __iter__(self) -> Iterator[TraceRequest]:
        for item in self._store.list():
            yield TraceRequest.from_resource(item)


class TraceRequestManager:
    def __init__(self, store: Optional[TraceflowStore] = None,
                 detail_base_path: Optional[str] = None):
        self.store = store if store is not None else TraceflowStore()
        self.detail_base_path = (detail_base_path or settings.DETAIL_BASE_PATH).rstrip("/")

    def submit(self, name: str, source_namespace: str, source_pod: str,
               destination_namespace: str, destination_pod: str) -> TraceRequest:
        """
        Create a new trace request.

        Raises:
            ValidationError: one or more fields are empty or not strings; nothing is created
            ConflictError: a trace request with this name already exists
            TransportError: the cluster could not be reached
        """
        values = {
            "name": name,
            "source_namespace": source_namespace,
            "source_pod": source_pod,
            "destination_namespace": destination_namespace,
            "destination_pod": destination_pod,
        }
        missing = [field for field in REQUIRED_FIELDS if _blank(values[field])]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)

        request = TraceRequest(**{k: v.strip() for k, v in values.items()})
        created = self.store.create(request.to_resource(self.store.api_version))
        logger.info("Created traceflow %s (%s -> %s)", request.name, request.source, request.destination)
        return TraceRequest.from_resource(created) if created else request

    def get_by_name(self, name: str) -> TraceRequest:
        """
        Fetch one trace request by exact name.

        Raises:
            ValidationError: name is empty
            NotFoundError: no trace request has this name
            TransportError: the cluster could not be reached
        """
        if _blank(name):
            raise ValidationError("Missing required fields: name", fields=["name"])
        return TraceRequest.from_resource(self.store.get(name.strip()))

    def list_all(self) -> TraceRequestListing:
        """All trace requests, in the order the cluster returns them."""
        return TraceRequestListing(self.store)

    def detail_link(self, name: str) -> ResourceLink:
        return ResourceLink(text=name, ref=f"{self.detail_base_path}/{name}")

    def rows(self) -> List[TraceRow]:
        """Display rows for the trace list table. Raises TransportError on failure."""
        return [
            TraceRow(
                name=request.name,
                source_namespace=request.source_namespace,
                source_pod=request.source_pod,
                destination_namespace=request.destination_namespace,
                destination_pod=request.destination_pod,
                detail=self.detail_link(request.name)
            )
            for request in self.list_all()
        ]
