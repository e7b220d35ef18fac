"""Pydantic models for synthesizer inputs and the generated workflow artifact."""

from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .catalog import DEFAULT_CHANNEL, get_channel
from .errors import DegradedInput

_TEXT_FIELDS = (
    "user_id",
    "company_name",
    "business_email",
    "business_phone",
    "emergency_phone",
    "business_address",
    "industry",
    "response_time_goal",
    "business_hours",
)

_INVALID = object()


def _coerce_text(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        return _INVALID
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return _INVALID


def _coerce_services(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return _INVALID

    services = []
    for item in items:
        text = _coerce_text(item)
        if text is _INVALID:
            return _INVALID
        if text:
            services.append(text)
    return services or None


def _coerce_radius(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        return _INVALID
    try:
        radius = float(value)
    except (TypeError, ValueError):
        return _INVALID
    if not math.isfinite(radius) or radius < 0:
        return _INVALID
    return radius


class BusinessProfile(BaseModel):
    """Business data captured during onboarding.

    Only ``user_id`` and ``company_name`` are ever required, and that is enforced
    by the synthesizer, not here. Loosely typed optional values are coerced and
    anything that cannot be coerced is dropped and named in ``degraded_fields``.
    """

    model_config = ConfigDict(extra="ignore")

    user_id: str | None = None
    company_name: str | None = None
    business_email: str | None = None
    business_phone: str | None = None
    emergency_phone: str | None = None
    business_address: str | None = None
    industry: str | None = None
    primary_services: list[str] | None = None
    response_time_goal: str | None = None
    business_hours: str | None = None
    service_area_radius: float | None = None
    degraded_fields: list[str] = Field(default_factory=list, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_loose_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        degraded = list(data.get("degraded_fields") or [])
        coercers = {name: _coerce_text for name in _TEXT_FIELDS}
        coercers["primary_services"] = _coerce_services
        coercers["service_area_radius"] = _coerce_radius

        for name, coerce in coercers.items():
            if name not in data:
                continue
            value = coerce(data[name])
            if value is _INVALID:
                data.pop(name)
                degraded.append(name)
            else:
                data[name] = value

        data["degraded_fields"] = degraded
        return data


class NormalizedProfile(BaseModel):
    """A business profile with defaults applied and secondary attributes derived."""

    model_config = ConfigDict(frozen=True)

    user_id: str | None
    company_name: str | None
    display_name: str  # used in prompt text
    workflow_label: str  # used in the artifact name
    business_email: str | None = None
    email_domain: str | None = None
    business_phone: str | None = None
    emergency_phone: str | None = None
    business_address: str | None = None
    industry_key: str | None = None
    industry_description: str
    primary_services: tuple[str, ...] = ()
    services_phrase: str  # explicit services, else the industry default
    response_time_goal: str | None = None
    response_time_phrase: str
    business_hours: str | None = None
    service_area_radius: float | None = None
    degraded: tuple[DegradedInput, ...] = ()


class CredentialRef(BaseModel):
    """Reference to a tenant credential, resolved by the execution runtime."""

    id: str
    name: str


NodeRole = Literal["trigger", "ai", "action", "manager", "supplier"]


class WorkflowNode(BaseModel):
    """A single node in the generated automation graph."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    type: str
    type_version: float = Field(alias="typeVersion")
    position: list[int]
    parameters: dict[str, Any] = {}
    credentials: dict[str, CredentialRef] | None = None
    role: NodeRole = Field(exclude=True)


class ConnectionTarget(BaseModel):
    """Destination input of a connection."""

    node: str
    type: str = "main"
    index: int = 0


class NodeConnections(BaseModel):
    """Outgoing connections of one node; one list of targets per output index."""

    main: list[list[ConnectionTarget]] = []


class WorkflowGraph(BaseModel):
    nodes: list[WorkflowNode]
    connections: dict[str, NodeConnections]


class WorkflowMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    instance_id: str | None = Field(None, alias="instanceId")
    company_name: str | None = Field(None, alias="companyName")
    business_type: str = Field("service-business", alias="businessType")
    phone_system: str | None = Field(None, alias="phoneSystem")
    custom_managers: list[str] = Field(default_factory=list, alias="customManagers")
    custom_suppliers: list[str] = Field(default_factory=list, alias="customSuppliers")


class WorkflowArtifact(BaseModel):
    """The complete declarative workflow handed to the deployment collaborator."""

    name: str
    nodes: list[WorkflowNode]
    connections: dict[str, NodeConnections]
    meta: WorkflowMeta
    active: bool = False
    settings: dict[str, Any] = {"executionOrder": "v1"}

    def node_by_id(self, node_id: str) -> WorkflowNode | None:
        return next((node for node in self.nodes if node.id == node_id), None)

    def nodes_with_role(self, role: NodeRole) -> list[WorkflowNode]:
        return [node for node in self.nodes if node.role == role]

    def to_dict(self) -> dict:
        """Export in the runtime's JSON shape (camelCase keys, no internal role tags)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LabelMapping(BaseModel):
    """Maps a placeholder label key to the tenant's real Gmail label id."""

    model_config = ConfigDict(populate_by_name=True)

    standard_label_key: str = Field(alias="standardLabelKey", min_length=1)
    gmail_label_id: str = Field(alias="gmailLabelId", min_length=1)


class SynthesisOptions(BaseModel):
    label_mappings: list[LabelMapping] = []
    channel: str = DEFAULT_CHANNEL

    @field_validator("channel", mode="before")
    @classmethod
    def _known_channel(cls, value: Any) -> str:
        """Unknown or non-text channels fall back to the default channel."""
        spec = get_channel(value)
        return spec.key if spec else DEFAULT_CHANNEL
