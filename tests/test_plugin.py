import unittest

from fakes import FakeStore
from traceflow_plugin.actions import ADD_TRACEFLOW_ACTION, SHOW_GRAPH_ACTION
from traceflow_plugin.manager import TraceRequestManager
from traceflow_plugin.plugin import TraceflowPlugin
from traceflow_plugin.views import TRACE_COLUMNS

ADD_PAYLOAD = {
    "action": ADD_TRACEFLOW_ACTION,
    "name": "t1",
    "fromNamespace": "default",
    "fromPod": "pod-a",
    "toNamespace": "default",
    "toPod": "pod-b",
}


class TestTraceflowPlugin(unittest.TestCase):

    def setUp(self):
        self.store = FakeStore()
        self.plugin = TraceflowPlugin(TraceRequestManager(store=self.store, detail_base_path="/detail"))

    def test_capabilities(self):
        descriptor = self.plugin.capabilities()
        self.assertEqual(descriptor.name, "traceflowPlugin")
        self.assertTrue(descriptor.is_module)
        self.assertEqual(
            sorted(descriptor.action_names),
            ["traceflowPlugin/addTf", "traceflowPlugin/showGraphAction"]
        )

    def test_navigation(self):
        nav = self.plugin.navigation("/traceflow-plugin/")
        self.assertEqual(nav, {
            "title": "Trace Flow",
            "path": "/traceflow-plugin/components",
            "iconName": "cloud"
        })

    def test_add_action_creates_trace(self):
        result = self.plugin.handle_action(dict(ADD_PAYLOAD))

        self.assertTrue(result["success"])
        self.assertEqual(result["traceflow"]["name"], "t1")
        self.assertEqual(self.store.items["t1"]["srcNamespace"], "default")

    def test_add_action_missing_field(self):
        result = self.plugin.handle_action(dict(ADD_PAYLOAD, toPod=""))

        self.assertFalse(result["success"])
        self.assertEqual(result["kind"], "validation")
        self.assertIn("destination_pod", result["error"])
        self.assertEqual(self.store.create_calls, 0)

    def test_add_action_duplicate(self):
        self.plugin.handle_action(dict(ADD_PAYLOAD))
        result = self.plugin.handle_action(dict(ADD_PAYLOAD))

        self.assertFalse(result["success"])
        self.assertEqual(result["kind"], "conflict")

    def test_add_action_ignores_unexpected_form_fields(self):
        result = self.plugin.handle_action(dict(ADD_PAYLOAD, manager="x", extra="y"))

        self.assertTrue(result["success"])
        self.assertEqual(self.store.create_calls, 1)

    def test_add_action_non_string_field(self):
        result = self.plugin.handle_action(dict(ADD_PAYLOAD, name=5))

        self.assertFalse(result["success"])
        self.assertEqual(result["kind"], "validation")
        self.assertEqual(self.store.create_calls, 0)

    def test_unknown_action(self):
        result = self.plugin.handle_action({"action": "traceflowPlugin/deleteTf"})

        self.assertFalse(result["success"])
        self.assertIn("no handler defined", result["error"])

    def test_show_graph_returns_dot_without_keeping_it(self):
        self.plugin.handle_action(dict(ADD_PAYLOAD))

        result = self.plugin.handle_action({"action": SHOW_GRAPH_ACTION, "name": "t1"})

        self.assertTrue(result["success"])
        self.assertIn("default/pod-a", result["graph"])
        # Nothing graph-related survives on the plugin between calls
        content = self.plugin.render("/components")
        self.assertNotIn("graphviz", str(content))

    def test_show_graph_unknown_trace(self):
        result = self.plugin.handle_action({"action": SHOW_GRAPH_ACTION, "name": "missing"})

        self.assertFalse(result["success"])
        self.assertEqual(result["kind"], "not_found")

    def test_render_lists_traces(self):
        self.plugin.handle_action(dict(ADD_PAYLOAD))

        content = self.plugin.render("components")

        self.assertEqual(content["title"][0]["config"]["value"], "Antrea Traceflow")
        layout, table = content["viewComponents"]
        controls = layout["config"]["sections"][0][0]["view"]
        titles = [action["title"] for action in controls["config"]["actions"]]
        self.assertEqual(sorted(titles), ["Generate Trace Graph", "Start New Trace"])

        self.assertEqual([c["name"] for c in table["config"]["columns"]], TRACE_COLUMNS)
        rows = table["config"]["rows"]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["Trace"]["config"]["value"], "t1")
        self.assertEqual(rows[0]["Detailed Information"]["config"]["ref"], "/detail/t1")

    def test_add_form_fields(self):
        content = self.plugin.render("/components")
        controls = content["viewComponents"][0]["config"]["sections"][0][0]["view"]
        start = next(a for a in controls["config"]["actions"] if a["title"] == "Start New Trace")
        fields = start["form"]["fields"]

        self.assertEqual(
            [f["name"] for f in fields],
            ["name", "fromNamespace", "fromPod", "toNamespace", "toPod", "action"]
        )
        self.assertEqual(fields[-1], {"type": "hidden", "name": "action", "value": ADD_TRACEFLOW_ACTION})

    def test_render_with_graph(self):
        content = self.plugin.render("/components", graph="digraph t1 {}")

        section = content["viewComponents"][0]["config"]["sections"][0]
        self.assertEqual(len(section), 2)
        self.assertEqual(section[1]["view"]["config"]["body"]["config"]["dot"], "digraph t1 {}")

    def test_render_survives_list_failure(self):
        self.store.fail_next_list = True

        content = self.plugin.render("/components")

        table = content["viewComponents"][1]
        self.assertEqual(table["config"]["rows"], [])
        self.assertIn("Failed to list traces", table["config"]["emptyContent"])

        # The next render lists again
        self.plugin.handle_action(dict(ADD_PAYLOAD))
        table = self.plugin.render("/components")["viewComponents"][1]
        self.assertEqual(len(table["config"]["rows"]), 1)


if __name__ == '__main__':
    unittest.main()
