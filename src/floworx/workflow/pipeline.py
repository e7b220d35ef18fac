"""Workflow synthesis pipeline: profile → normalize → cap rosters → bind → prompt → graph → artifact."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..config import Settings, get_settings
from .catalog import get_channel
from .credentials import bind_credentials
from .errors import ArtifactInvariantError, PreconditionError
from .graph import apply_label_mappings, assemble_graph, check_graph
from .normalizer import normalize
from .prompt import compose_prompt
from .roster import MAX_MANAGERS, MAX_SUPPLIERS, clean_roster, limit
from .schema import BusinessProfile, LabelMapping, SynthesisOptions, WorkflowArtifact
from .serializer import serialize, workflow_name

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "company_name")


def _require_profile(business_profile: BusinessProfile | Mapping[str, Any] | None) -> BusinessProfile:
    if business_profile is None:
        logger.error("Workflow synthesis called without business data")
        raise PreconditionError("Business data is required", field="business_profile")

    if isinstance(business_profile, BusinessProfile):
        profile = business_profile
    elif isinstance(business_profile, Mapping):
        profile = BusinessProfile.model_validate(dict(business_profile))
    else:
        raise PreconditionError(
            f"Business data must be a mapping, got {type(business_profile).__name__}",
            field="business_profile",
        )

    for field in REQUIRED_FIELDS:
        if not getattr(profile, field):
            logger.error("Workflow synthesis missing %s", field, extra={"user_id": profile.user_id})
            raise PreconditionError(f"Business data with {field} is required", field=field)

    return profile


def _parse_options(options: SynthesisOptions | Mapping[str, Any] | list | None, user_id: str) -> SynthesisOptions:
    """Lenient option parsing; malformed label mappings are skipped, never fatal."""
    if options is None:
        return SynthesisOptions()
    if isinstance(options, SynthesisOptions):
        return options

    if isinstance(options, list):
        raw_mappings, channel = options, None
    elif isinstance(options, Mapping):
        raw_mappings = options.get("label_mappings", options.get("labelMappings")) or []
        channel = options.get("channel")
    else:
        logger.warning("Ignoring synthesis options of type %s", type(options).__name__, extra={"user_id": user_id})
        return SynthesisOptions()

    mappings = []
    for entry in raw_mappings if isinstance(raw_mappings, list) else []:
        try:
            mappings.append(LabelMapping.model_validate(entry))
        except ValidationError:
            logger.warning("Skipping malformed label mapping %r", entry, extra={"user_id": user_id})

    if channel and get_channel(channel) is None:
        logger.warning("Unknown channel %r, using default", channel, extra={"user_id": user_id})
        channel = None

    return SynthesisOptions(label_mappings=mappings, **({"channel": channel} if channel else {}))


def synthesize(
    business_profile: BusinessProfile | Mapping[str, Any] | None,
    options: SynthesisOptions | Mapping[str, Any] | list | None = None,
    custom_managers: list[str] | None = None,
    custom_suppliers: list[str] | None = None,
    channel_provider: str | None = None,
    settings: Settings | None = None,
) -> WorkflowArtifact:
    """Generate a personalized email automation workflow for one business.

    Raises PreconditionError when ``user_id`` or ``company_name`` is missing.
    Everything else degrades to defaults. Rosters longer than the caps are cut
    silently; ``meta`` reports what was kept.
    """
    settings = settings or get_settings()
    profile = _require_profile(business_profile)
    opts = _parse_options(options, profile.user_id)
    channel = get_channel(opts.channel) or get_channel(None)

    normalized = normalize(profile, settings)
    managers = limit(clean_roster(custom_managers), MAX_MANAGERS)
    suppliers = limit(clean_roster(custom_suppliers), MAX_SUPPLIERS)
    provider = channel_provider.strip() if isinstance(channel_provider, str) and channel_provider.strip() else None

    credential = bind_credentials(normalized.user_id, normalized.company_name, channel)
    prompt = compose_prompt(normalized, managers, suppliers, provider)
    graph = assemble_graph(normalized, credential, prompt, managers, suppliers, channel=channel, settings=settings)
    graph = apply_label_mappings(graph, opts.label_mappings)

    problems = check_graph(graph.nodes, graph.connections)
    if problems:
        raise ArtifactInvariantError(problems)

    artifact = serialize(
        workflow_name(normalized.workflow_label),
        graph,
        managers,
        suppliers,
        profile=normalized,
        channel_provider=provider,
    )

    logger.info(
        "Synthesized workflow '%s' with %d nodes (%d managers, %d suppliers)",
        artifact.name,
        len(artifact.nodes),
        len(managers),
        len(suppliers),
        extra={"user_id": normalized.user_id},
    )
    return artifact


async def synthesize_async(
    business_profile: BusinessProfile | Mapping[str, Any] | None,
    options: SynthesisOptions | Mapping[str, Any] | list | None = None,
    custom_managers: list[str] | None = None,
    custom_suppliers: list[str] | None = None,
    channel_provider: str | None = None,
    settings: Settings | None = None,
) -> WorkflowArtifact:
    """Awaitable form of :func:`synthesize`."""
    return synthesize(
        business_profile,
        options,
        custom_managers,
        custom_suppliers,
        channel_provider,
        settings=settings,
    )
