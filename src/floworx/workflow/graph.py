"""Graph assembly: nodes and connections for one tenant's email automation.

Topology::

    <channel> Trigger -> AI Master Classifier -+-> Category Switch -> one label node per category
                                               +-> every manager notifier
                                               +-> every supplier notifier

Node ids derive from the node's role (``gmail-trigger``, ``ai-classifier``,
``label-urgent``, ``manager-0``, ``supplier-3``...) so re-synthesis with the same
roster order yields the same ids. Connections use the runtime's format, which
keys edges by node *name*; names are therefore kept unique as well. Roster
names are claimed before the fixed nodes and category labels are named
``<Category> Label``, so a notifier only differs from its display name when the
same name repeats in the rosters (``Hailey``, ``Hailey1``).
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from ..config import Settings, get_settings
from .catalog import STANDARD_CATEGORIES, ChannelSpec, get_channel
from .credentials import credential_block
from .roster import manager_label_id, supplier_label_id
from .schema import (
    ConnectionTarget,
    CredentialRef,
    LabelMapping,
    NodeConnections,
    NodeRole,
    NormalizedProfile,
    WorkflowGraph,
    WorkflowNode,
)

AI_NODE_NAME = "AI Master Classifier"
AI_NODE_TYPE = "@n8n/n8n-nodes-langchain.chatOpenAi"
SWITCH_NODE_NAME = "Category Switch"
SWITCH_NODE_TYPE = "n8n-nodes-base.switch"
LABEL_NODE_SUFFIX = " Label"

EMAIL_TEXT_TEMPLATE = (
    "=Subject: {{ $json.subject }}\n"
    "From: {{ $json.from }}\n"
    "To: {{ $json.to }}\n"
    "Date: {{ $now }}\n"
    "Thread ID: {{ $json.threadId }}\n"
    "Message ID: {{ $json.id }}\n\n"
    "Email Body:\n{{ $json.body }}"
)
PARSED_MESSAGE_ID = "={{ $json.parsed_output.id }}"
PRIMARY_CATEGORY = "={{ $json.parsed_output.primary_category }}"

# Canvas layout: one column per stage, ROW_HEIGHT between stacked nodes
COLUMN_X = {"trigger": 0, "ai": 320, "switch": 640, "label": 960, "manager": 1280, "supplier": 1600}
ROW_HEIGHT = 192


class NodeIdAllocator:
    """Hands out role-derived node ids and unique node names for one graph."""

    def __init__(self) -> None:
        self._ids: set[str] = set()
        self._names: set[str] = set()

    def allocate(self, role_key: str, index: int | None = None) -> str:
        node_id = role_key if index is None else f"{role_key}-{index}"
        if node_id in self._ids:
            raise ValueError(f"Node id already allocated: {node_id}")
        self._ids.add(node_id)
        return node_id

    def claim_name(self, name: str) -> str:
        """Reserve ``name``, suffixing a counter when an earlier node already uses it."""
        candidate = name
        counter = 1
        while candidate in self._names:
            candidate = f"{name}{counter}"
            counter += 1
        self._names.add(candidate)
        return candidate


def trigger_filter(email_domain: str | None) -> str:
    """Inbox query for the trigger; mail from the business's own domain is excluded."""
    if not email_domain:
        return "in:inbox"
    return f"in:inbox -(from:(*@{email_domain}))"


def _category_rule(category: str) -> dict[str, Any]:
    return {
        "conditions": {
            "options": {"caseSensitive": True, "leftValue": "", "typeValidation": "strict", "version": 2},
            "conditions": [
                {
                    "leftValue": PRIMARY_CATEGORY,
                    "rightValue": category,
                    "operator": {"type": "string", "operation": "equals"},
                }
            ],
            "combinator": "and",
        },
        "renameOutput": True,
        "outputKey": category,
    }


def _label_node(
    *,
    node_id: str,
    name: str,
    role: NodeRole,
    label_id: str,
    position: list[int],
    channel: ChannelSpec,
    credential: CredentialRef,
) -> WorkflowNode:
    return WorkflowNode(
        id=node_id,
        name=name,
        type=channel.action_type,
        type_version=channel.action_type_version,
        position=position,
        parameters={"operation": "addLabels", "messageId": PARSED_MESSAGE_ID, "labelIds": [label_id]},
        credentials=credential_block(credential, channel),
        role=role,
    )


def _link(sources: dict[str, NodeConnections], source: WorkflowNode, outputs: list[list[WorkflowNode]]) -> None:
    sources[source.name] = NodeConnections(
        main=[[ConnectionTarget(node=target.name) for target in output] for output in outputs]
    )


def assemble_graph(
    profile: NormalizedProfile,
    credential: CredentialRef,
    prompt: str,
    managers: list[str],
    suppliers: list[str],
    channel: ChannelSpec | None = None,
    settings: Settings | None = None,
) -> WorkflowGraph:
    """Build the node list and connection map for already-capped rosters."""
    settings = settings or get_settings()
    channel = channel or get_channel(None)
    ids = NodeIdAllocator()
    manager_names = [ids.claim_name(manager) for manager in managers]
    supplier_names = [ids.claim_name(supplier) for supplier in suppliers]

    trigger = WorkflowNode(
        id=ids.allocate(f"{channel.key}-trigger"),
        name=ids.claim_name(f"{channel.display_name} Trigger"),
        type=channel.trigger_type,
        type_version=channel.trigger_type_version,
        position=[COLUMN_X["trigger"], 0],
        parameters={
            "pollTimes": {"item": [{"mode": "custom", "cronExpression": settings.poll_cron_expression}]},
            "simple": False,
            "filters": {"q": trigger_filter(profile.email_domain)},
            "options": {"downloadAttachments": True},
        },
        credentials=credential_block(credential, channel),
        role="trigger",
    )

    classifier = WorkflowNode(
        id=ids.allocate("ai-classifier"),
        name=ids.claim_name(AI_NODE_NAME),
        type=AI_NODE_TYPE,
        type_version=1.3,
        position=[COLUMN_X["ai"], 0],
        parameters={"promptType": "define", "text": EMAIL_TEXT_TEMPLATE, "options": {"systemMessage": prompt}},
        role="ai",
    )

    switch = WorkflowNode(
        id=ids.allocate("category-switch"),
        name=ids.claim_name(SWITCH_NODE_NAME),
        type=SWITCH_NODE_TYPE,
        type_version=3.2,
        position=[COLUMN_X["switch"], 0],
        parameters={"rules": {"values": [_category_rule(c) for c in STANDARD_CATEGORIES]}, "options": {}},
        role="action",
    )

    labels = [
        _label_node(
            node_id=ids.allocate(f"label-{category.lower()}"),
            name=ids.claim_name(f"{category}{LABEL_NODE_SUFFIX}"),
            role="action",
            label_id=f"Label_{category}",
            position=[COLUMN_X["label"], row * ROW_HEIGHT],
            channel=channel,
            credential=credential,
        )
        for row, category in enumerate(STANDARD_CATEGORIES)
    ]

    manager_nodes = [
        _label_node(
            node_id=ids.allocate("manager", index),
            name=manager_names[index],
            role="manager",
            label_id=manager_label_id(manager),
            position=[COLUMN_X["manager"], index * ROW_HEIGHT],
            channel=channel,
            credential=credential,
        )
        for index, manager in enumerate(managers)
    ]

    supplier_nodes = [
        _label_node(
            node_id=ids.allocate("supplier", index),
            name=supplier_names[index],
            role="supplier",
            label_id=supplier_label_id(supplier),
            position=[COLUMN_X["supplier"], index * ROW_HEIGHT],
            channel=channel,
            credential=credential,
        )
        for index, supplier in enumerate(suppliers)
    ]

    connections: dict[str, NodeConnections] = {}
    _link(connections, trigger, [[classifier]])
    _link(connections, classifier, [[switch, *manager_nodes, *supplier_nodes]])
    _link(connections, switch, [[label] for label in labels])

    return WorkflowGraph(
        nodes=[trigger, classifier, switch, *labels, *manager_nodes, *supplier_nodes],
        connections=connections,
    )


def apply_label_mappings(graph: WorkflowGraph, mappings: list[LabelMapping]) -> WorkflowGraph:
    """Swap placeholder label ids for the tenant's real Gmail label ids.

    A mapping key matches a node's placeholder label id with or without its
    ``Label_`` prefix (``Label_Urgent``, ``Urgent``, ``Manager_Hailey``) or the
    node name, case-insensitively. Unmatched labels keep their placeholder.
    """
    if not mappings:
        return graph

    lookup = {m.standard_label_key.lower(): m.gmail_label_id for m in mappings}
    nodes = []
    for node in graph.nodes:
        label_ids = node.parameters.get("labelIds")
        if not label_ids:
            nodes.append(node)
            continue

        resolved = []
        for label_id in label_ids:
            keys = (label_id.lower(), label_id.lower().removeprefix("label_"), node.name.lower())
            resolved.append(next((lookup[k] for k in keys if k in lookup), label_id))
        nodes.append(node.model_copy(update={"parameters": {**node.parameters, "labelIds": resolved}}))

    return WorkflowGraph(nodes=nodes, connections=graph.connections)


def check_graph(nodes: list[WorkflowNode], connections: dict[str, NodeConnections]) -> list[str]:
    """Return a list of structural problems. An empty list means the graph is sound."""
    problems: list[str] = []

    for node_id, count in Counter(node.id for node in nodes).items():
        if count > 1:
            problems.append(f"Duplicate node id '{node_id}'")
    for name, count in Counter(node.name for node in nodes).items():
        if count > 1:
            problems.append(f"Duplicate node name '{name}'")

    names = {node.name for node in nodes}
    linked: set[str] = set()
    for source, outgoing in connections.items():
        if source not in names:
            problems.append(f"Connection from unknown node '{source}'")
        linked.add(source)
        for output in outgoing.main:
            for target in output:
                if target.node not in names:
                    problems.append(f"Connection from '{source}' to unknown node '{target.node}'")
                linked.add(target.node)

    for node in nodes:
        if node.name not in linked:
            problems.append(f"Node '{node.id}' is not connected")

    return problems
