"""API models for the workflow synthesizer."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class WorkflowRequest(BaseModel):
    """Request to synthesize a personalized workflow."""

    business_data: Optional[dict[str, Any]] = Field(
        None, description="Business profile captured during onboarding (user_id and company_name required)"
    )
    custom_managers: list[Any] = Field(default_factory=list, description="Manager names, first 5 are used")
    custom_suppliers: list[Any] = Field(default_factory=list, description="Supplier names, first 10 are used")
    phone_system: Optional[str] = Field(None, description="Phone provider label, e.g. RingCentral")
    label_mappings: list[Any] = Field(
        default_factory=list,
        description="Placeholder label key to Gmail label id mappings",
    )


class WorkflowSummary(BaseModel):
    """Digest of a generated workflow."""

    name: str
    total_nodes: int
    node_roles: dict[str, int]
    connections: int
    managers_included: str = Field(..., description='e.g. "5 of 8"')
    suppliers_included: str


class WorkflowResponse(BaseModel):
    success: bool = True
    summary: WorkflowSummary
    system_message_preview: str
    trigger_filter: Optional[str] = None
    workflow: dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str = "Floworx Workflow Synthesizer"
