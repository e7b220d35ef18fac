import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from floworx.config import Settings
from floworx.workflow.catalog import STANDARD_CATEGORIES
from floworx.workflow.credentials import bind_credentials
from floworx.workflow.graph import (
    NodeIdAllocator,
    apply_label_mappings,
    assemble_graph,
    check_graph,
    trigger_filter,
)
from floworx.workflow.normalizer import normalize
from floworx.workflow.schema import ConnectionTarget, LabelMapping, NodeConnections


class GraphAssemblerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = Settings(industry_descriptions={}, response_time_phrases={})
        self.business = {
            "user_id": "user_123",
            "company_name": "The Hot Tub Man Ltd",
            "industry": "hot-tub-spa",
            "business_email": "service@thehotubman.com",
        }

    def _graph(self, business=None, managers=(), suppliers=(), prompt="system prompt"):
        profile = normalize(business or self.business, self.settings)
        credential = bind_credentials(profile.user_id, profile.company_name)
        return assemble_graph(profile, credential, prompt, list(managers), list(suppliers), settings=self.settings)

    @staticmethod
    def _targets(graph, source_name):
        return [[t.node for t in output] for output in graph.connections[source_name].main]

    def test_trigger_filter_excludes_business_domain(self):
        graph = self._graph()
        trigger = next(n for n in graph.nodes if n.role == "trigger")

        self.assertEqual(trigger.id, "gmail-trigger")
        self.assertEqual(trigger.type, "n8n-nodes-base.gmailTrigger")
        self.assertEqual(trigger.parameters["filters"]["q"], "in:inbox -(from:(*@thehotubman.com))")
        self.assertEqual(trigger.parameters["pollTimes"]["item"][0]["cronExpression"], "=0 */2 * * * *")

    def test_trigger_filter_without_known_domain_is_unconstrained(self):
        graph = self._graph({"user_id": "u1", "company_name": "No Mail Co"})
        trigger = next(n for n in graph.nodes if n.role == "trigger")

        self.assertEqual(trigger.parameters["filters"]["q"], "in:inbox")
        self.assertEqual(trigger_filter(None), "in:inbox")

    def test_single_ai_node_carries_the_prompt(self):
        graph = self._graph(prompt="You are an expert email router")
        ai_nodes = [n for n in graph.nodes if n.role == "ai"]

        self.assertEqual(len(ai_nodes), 1)
        self.assertEqual(ai_nodes[0].id, "ai-classifier")
        self.assertEqual(ai_nodes[0].parameters["options"]["systemMessage"], "You are an expert email router")

    def test_one_notifier_node_per_roster_entry(self):
        managers = ["Hailey", "Jillian", "Stacie"]
        suppliers = ["Aqua Spa Pool Supply", "Paradise Patio Furniture Ltd"]
        graph = self._graph(managers=managers, suppliers=suppliers)

        manager_nodes = [n for n in graph.nodes if n.role == "manager"]
        supplier_nodes = [n for n in graph.nodes if n.role == "supplier"]

        self.assertEqual([n.id for n in manager_nodes], ["manager-0", "manager-1", "manager-2"])
        self.assertEqual([n.name for n in manager_nodes], managers)
        self.assertEqual([n.id for n in supplier_nodes], ["supplier-0", "supplier-1"])
        self.assertEqual([n.name for n in supplier_nodes], suppliers)

        for node in manager_nodes + supplier_nodes:
            self.assertEqual(node.type, "n8n-nodes-base.gmail")
            self.assertEqual(node.parameters["operation"], "addLabels")
            self.assertEqual(node.credentials["gmailOAuth2"].id, "user_user_123_gmail")

        self.assertEqual(manager_nodes[0].parameters["labelIds"], ["Label_Manager_Hailey"])
        self.assertEqual(supplier_nodes[0].parameters["labelIds"], ["Label_Supplier_AquaSpaPoolSupply"])

    def test_standard_label_nodes_and_category_switch(self):
        graph = self._graph()

        switch = next(n for n in graph.nodes if n.id == "category-switch")
        rule_keys = [rule["outputKey"] for rule in switch.parameters["rules"]["values"]]
        self.assertEqual(rule_keys, list(STANDARD_CATEGORIES))

        for category in ("Urgent", "Sales", "Support", "Banking", "FormSub"):
            node = next(n for n in graph.nodes if n.name == f"{category} Label")
            self.assertEqual(node.id, f"label-{category.lower()}")
            self.assertEqual(node.type, "n8n-nodes-base.gmail")
            self.assertEqual(node.parameters["operation"], "addLabels")

    def test_connections_form_trigger_ai_broadcast_topology(self):
        graph = self._graph(managers=["Hailey"], suppliers=["Strong Spas", "Aqua Spa"])

        self.assertEqual(self._targets(graph, "Gmail Trigger"), [["AI Master Classifier"]])
        self.assertEqual(
            self._targets(graph, "AI Master Classifier"),
            [["Category Switch", "Hailey", "Strong Spas", "Aqua Spa"]],
        )
        self.assertEqual(self._targets(graph, "Category Switch"), [[f"{c} Label"] for c in STANDARD_CATEGORIES])
        self.assertEqual(check_graph(graph.nodes, graph.connections), [])

    def test_ids_are_stable_across_runs(self):
        first = self._graph(managers=["A", "B"], suppliers=["C"])
        second = self._graph(managers=["A", "B"], suppliers=["C"])

        self.assertEqual([n.id for n in first.nodes], [n.id for n in second.nodes])
        self.assertEqual(first, second)

    def test_roster_name_matching_a_category_keeps_its_display_name(self):
        graph = self._graph(managers=["Sales", "Urgent"], suppliers=["Support"])

        names = [n.name for n in graph.nodes if n.role in ("manager", "supplier")]
        self.assertEqual(names, ["Sales", "Urgent", "Support"])
        self.assertEqual(self._targets(graph, "AI Master Classifier"), [["Category Switch", "Sales", "Urgent", "Support"]])
        self.assertEqual(check_graph(graph.nodes, graph.connections), [])

    def test_roster_name_matching_a_fixed_node_keeps_its_display_name(self):
        graph = self._graph(managers=["Gmail Trigger", "Sales Label"])

        self.assertEqual([n.name for n in graph.nodes if n.role == "manager"], ["Gmail Trigger", "Sales Label"])
        self.assertEqual(graph.nodes[0].name, "Gmail Trigger1")
        self.assertEqual(self._targets(graph, "Gmail Trigger1"), [["AI Master Classifier"]])
        self.assertEqual(check_graph(graph.nodes, graph.connections), [])

    def test_only_repeated_roster_names_are_suffixed(self):
        graph = self._graph(managers=["Sales", "Hailey", "Hailey"], suppliers=["Hailey"])

        names = [n.name for n in graph.nodes if n.role in ("manager", "supplier")]
        self.assertEqual(names, ["Sales", "Hailey", "Hailey1", "Hailey2"])
        self.assertEqual(len({n.id for n in graph.nodes}), len(graph.nodes))
        self.assertEqual(check_graph(graph.nodes, graph.connections), [])

    def test_node_id_allocator(self):
        ids = NodeIdAllocator()

        self.assertEqual(ids.allocate("manager", 0), "manager-0")
        self.assertEqual(ids.allocate("ai-classifier"), "ai-classifier")
        with self.assertRaises(ValueError):
            ids.allocate("manager", 0)

        self.assertEqual(ids.claim_name("Urgent"), "Urgent")
        self.assertEqual(ids.claim_name("Urgent"), "Urgent1")

    def test_check_graph_reports_structural_problems(self):
        graph = self._graph(managers=["Hailey"])
        nodes = graph.nodes + [graph.nodes[-1]]
        connections = dict(graph.connections)
        connections["Ghost"] = NodeConnections(main=[[ConnectionTarget(node="Nowhere")]])

        problems = check_graph(nodes, connections)

        self.assertIn("Duplicate node id 'manager-0'", problems)
        self.assertIn("Duplicate node name 'Hailey'", problems)
        self.assertIn("Connection from unknown node 'Ghost'", problems)
        self.assertIn("Connection from 'Ghost' to unknown node 'Nowhere'", problems)

        del connections["AI Master Classifier"]
        self.assertIn("Node 'manager-0' is not connected", check_graph(graph.nodes, connections))

    def test_label_mappings_replace_placeholder_label_ids(self):
        graph = self._graph(managers=["Hailey"])
        mapped = apply_label_mappings(
            graph,
            [
                LabelMapping(standardLabelKey="Urgent", gmailLabelId="Label_123"),
                LabelMapping(standard_label_key="manager_hailey", gmail_label_id="Label_456"),
            ],
        )

        by_id = {n.id: n for n in mapped.nodes}
        self.assertEqual(by_id["label-urgent"].parameters["labelIds"], ["Label_123"])
        self.assertEqual(by_id["manager-0"].parameters["labelIds"], ["Label_456"])
        self.assertEqual(by_id["label-sales"].parameters["labelIds"], ["Label_Sales"])
        # the input graph is left untouched
        self.assertEqual(next(n for n in graph.nodes if n.id == "label-urgent").parameters["labelIds"], ["Label_Urgent"])


if __name__ == "__main__":
    unittest.main()
