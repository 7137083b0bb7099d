"""In-memory stand-in for TraceflowStore."""

import copy

from traceflow_plugin.errors import ConflictError, NotFoundError, TransportError


class FakeStore:
    api_version = "antrea.tanzu.vmware.com/v1"

    def __init__(self):
        self.items = {}
        self.create_calls = 0
        self.list_calls = 0
        self.fail_next_list = False

    def create(self, body):
        self.create_calls += 1
        name = body["metadata"]["name"]
        if name in self.items:
            raise ConflictError(f'traceflows "{name}" already exists')
        self.items[name] = copy.deepcopy(body)
        return copy.deepcopy(body)

    def get(self, name):
        if name not in self.items:
            raise NotFoundError(f"Traceflow '{name}' not found")
        return copy.deepcopy(self.items[name])

    def list(self):
        self.list_calls += 1
        if self.fail_next_list:
            self.fail_next_list = False
            raise TransportError("Cannot connect to Kubernetes API at https://mock-k8s:6443.")
        for item in list(self.items.values()):
            yield copy.deepcopy(item)
