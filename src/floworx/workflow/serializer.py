"""Final artifact assembly."""

from __future__ import annotations

from .schema import NormalizedProfile, WorkflowArtifact, WorkflowGraph, WorkflowMeta

WORKFLOW_NAME_SUFFIX = " - Email Automation Workflow"


def workflow_name(label: str) -> str:
    return f"{label}{WORKFLOW_NAME_SUFFIX}"


def serialize(
    name: str,
    graph: WorkflowGraph,
    managers: list[str],
    suppliers: list[str],
    profile: NormalizedProfile | None = None,
    channel_provider: str | None = None,
) -> WorkflowArtifact:
    """Wrap a graph into the deployable artifact.

    ``meta`` echoes exactly the capped rosters the notifier nodes were built from.
    The lists are copied so the caller owns the artifact outright.
    """
    meta = WorkflowMeta(
        custom_managers=list(managers),
        custom_suppliers=list(suppliers),
        phone_system=channel_provider,
    )
    if profile is not None:
        meta = meta.model_copy(
            update={
                "instance_id": profile.user_id,
                "company_name": profile.company_name,
                "business_type": profile.industry_key or "service-business",
            }
        )

    return WorkflowArtifact(
        name=name,
        nodes=list(graph.nodes),
        connections=dict(graph.connections),
        meta=meta,
    )
