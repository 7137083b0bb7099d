# traceflow_plugin/k8s_tools/traceflow_store.py
"""
Traceflow custom resource store.

Narrow client for the cluster-scoped Traceflow resource: create, get and
list. Nothing here knows about forms or tables.
"""

import logging
from typing import Any, Dict, Iterator, Optional
from urllib.parse import quote

from ..errors import NotFoundError, TransportError
from ..settings import settings
from .k8s_utils import k8s_request

logger = logging.getLogger(__name__)


class TraceflowStore:
    """Create, get and list Traceflow resources through the Kubernetes API."""

    def __init__(self, group: Optional[str] = None, version: Optional[str] = None,
                 plural: Optional[str] = None, page_size: Optional[int] = None):
        self.group = group or settings.CRD_GROUP
        self.version = version or settings.CRD_VERSION
        self.plural = plural or settings.CRD_PLURAL
        self.page_size = page_size or settings.LIST_PAGE_SIZE

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    @property
    def collection_path(self) -> str:
        return f"/apis/{self.group}/{self.version}/{self.plural}"

    def _missing_crd(self) -> TransportError:
        return TransportError(
            f"Custom resource {self.plural}.{self.group}/{self.version} is not served by the cluster"
        )

    def create(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a new resource. Conflicts surface as ConflictError."""
        try:
            return k8s_request("POST", self.collection_path, json=body)
        except NotFoundError:
            # 404 on the collection means the CRD isn't installed
            raise self._missing_crd()

    def get(self, name: str) -> Dict[str, Any]:
        """GET one resource by name. A miss surfaces as NotFoundError."""
        try:
            return k8s_request("GET", f"{self.collection_path}/{quote(name, safe='')}")
        except NotFoundError:
            raise NotFoundError(f"Traceflow '{name}' not found")

    def list(self) -> Iterator[Dict[str, Any]]:
        """
        Yield every resource, one page at a time.

        Pages are requested lazily with the limit/continue protocol, so a
        failure can surface part way through the iteration.
        """
        params: Dict[str, Any] = {"limit": self.page_size}
        while True:
            try:
                data = k8s_request("GET", self.collection_path, params=params)
            except NotFoundError:
                raise self._missing_crd()

            items = data.get("items") or []
            logger.debug("Fetched %d %s", len(items), self.plural)
            yield from items

            token = (data.get("metadata") or {}).get("continue")
            if not token:
                return
            params = {"limit": self.page_size, "continue": token}
