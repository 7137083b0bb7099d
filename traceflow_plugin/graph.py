# traceflow_plugin/graph.py
"""
Traceflow path graph.

Turns a trace request into a Graphviz DOT graph. The source pod and the
destination pod are always drawn; the observations Antrea writes into the
resource status, when there are any, are chained between them in the order
they were reported.
"""

from typing import Any, Dict, List

import graphviz

from .models import TraceRequest


def _observations(status: Dict[str, Any]) -> List[Dict[str, Any]]:
    observations = []
    for result in status.get("results") or []:
        node = result.get("node", "")
        for observation in result.get("observations") or []:
            observations.append(dict(observation, node=node))
    return observations


def _observation_label(observation: Dict[str, Any]) -> str:
    label = observation.get("component") or "Unknown"
    if observation.get("componentInfo"):
        label += f"\\n{observation['componentInfo']}"
    if observation.get("node"):
        label += f"\\n@{observation['node']}"
    return label


def build_graph(request: TraceRequest) -> graphviz.Digraph:
    graph = graphviz.Digraph(name=request.name)
    graph.attr(rankdir="LR")

    graph.node("source", request.source, shape="box")
    graph.node("destination", request.destination, shape="box")

    observations = _observations(request.status)
    if not observations:
        graph.edge("source", "destination", label=request.name)
        return graph

    previous = "source"
    for index, observation in enumerate(observations):
        node_id = f"obs{index}"
        graph.node(node_id, _observation_label(observation))
        graph.edge(previous, node_id, label=observation.get("action", ""))
        previous = node_id

    last_action = observations[-1].get("action", "")
    # Only a delivered packet reaches the destination pod
    if last_action == "Delivered":
        graph.edge(previous, "destination")
    else:
        graph.edge(previous, "destination", style="dashed", color="red")
    return graph


def render_dot(request: TraceRequest) -> str:
    """DOT source for the request's path graph."""
    return build_graph(request).source
