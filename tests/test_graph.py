from traceflow_plugin.graph import build_graph, render_dot
from traceflow_plugin.models import TraceRequest


def make_request(status=None):
    return TraceRequest(
        name="t1",
        source_namespace="default",
        source_pod="pod-a",
        destination_namespace="web",
        destination_pod="pod-b",
        status=status or {},
    )


def test_pending_trace_links_source_to_destination():
    dot = render_dot(make_request())

    assert dot.startswith("digraph t1 {")
    assert "default/pod-a" in dot
    assert "web/pod-b" in dot
    assert "source -> destination" in dot
    assert "obs0" not in dot
    # The old placeholder node is gone
    assert '"m"' not in dot


def test_observations_are_chained_in_order():
    status = {
        "phase": "Succeeded",
        "results": [
            {
                "node": "node-1",
                "observations": [
                    {"component": "SpoofGuard", "action": "Forwarded"},
                    {"component": "NetworkPolicy", "componentInfo": "EgressRule", "action": "Forwarded"},
                ],
            },
            {
                "node": "node-2",
                "observations": [
                    {"component": "Forwarding", "action": "Delivered"},
                ],
            },
        ],
    }

    graph = build_graph(make_request(status))
    dot = graph.source

    assert "source -> obs0" in dot
    assert "obs0 -> obs1" in dot
    assert "obs1 -> obs2" in dot
    assert "obs2 -> destination" in dot
    assert "EgressRule" in dot
    assert "@node-2" in dot
    assert "dashed" not in dot


def test_dropped_packet_marks_destination_unreached():
    status = {
        "results": [
            {"node": "node-1", "observations": [{"component": "NetworkPolicy", "action": "Dropped"}]},
        ],
    }

    dot = render_dot(make_request(status))

    assert "obs0 -> destination" in dot
    assert "dashed" in dot
    assert "Dropped" in dot
