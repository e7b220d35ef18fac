"""Fills absent business-profile fields and derives secondary attributes."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..config import Settings, get_settings
from .catalog import (
    default_services,
    describe_industry,
    industry_table,
    phrase_response_time,
    response_time_table,
)
from .errors import DegradedInput
from .schema import BusinessProfile, NormalizedProfile

logger = logging.getLogger(__name__)

PROMPT_NAME_FALLBACK = "your business"
WORKFLOW_LABEL_FALLBACK = "Your Business"

_DOMAIN_RE = re.compile(r"^(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}$")


def extract_email_domain(email: str | None) -> str | None:
    """Return the lowercase domain of an address, or None if it has no usable one."""
    if not email or email.count("@") != 1:
        return None
    local, domain = email.rsplit("@", 1)
    domain = domain.strip().rstrip(".").lower()
    if not local.strip() or not _DOMAIN_RE.match(domain):
        return None
    return domain


def normalize(
    profile: BusinessProfile | Mapping[str, Any] | None,
    settings: Settings | None = None,
) -> NormalizedProfile:
    """Apply defaults to a possibly sparse profile. Never raises on optional fields."""
    settings = settings or get_settings()

    if profile is None:
        profile = BusinessProfile()
    elif not isinstance(profile, BusinessProfile):
        profile = BusinessProfile.model_validate(dict(profile))

    degraded = [
        DegradedInput(field=name, reason="unusable value dropped")
        for name in profile.degraded_fields
    ]

    email_domain = extract_email_domain(profile.business_email)
    if profile.business_email and email_domain is None:
        degraded.append(
            DegradedInput(field="business_email", reason="no parsable domain; self-mail filter disabled")
        )

    industry_key = profile.industry.lower() if profile.industry else None
    if industry_key and industry_key not in industry_table(settings):
        degraded.append(DegradedInput(field="industry", reason=f"unrecognized industry '{profile.industry}'"))

    response_time_phrase = phrase_response_time(profile.response_time_goal, settings)
    if profile.response_time_goal and profile.response_time_goal not in response_time_table(settings):
        degraded.append(
            DegradedInput(
                field="response_time_goal",
                reason=f"unmapped response time code '{profile.response_time_goal}'",
            )
        )

    for item in degraded:
        logger.warning(
            "Degraded business profile input %s: %s",
            item.field,
            item.reason,
            extra={"user_id": profile.user_id},
        )

    return NormalizedProfile(
        user_id=profile.user_id,
        company_name=profile.company_name,
        display_name=profile.company_name or PROMPT_NAME_FALLBACK,
        workflow_label=profile.company_name or WORKFLOW_LABEL_FALLBACK,
        business_email=profile.business_email,
        email_domain=email_domain,
        business_phone=profile.business_phone,
        emergency_phone=profile.emergency_phone,
        business_address=profile.business_address,
        industry_key=industry_key,
        industry_description=describe_industry(profile.industry, settings),
        primary_services=tuple(profile.primary_services or ()),
        services_phrase=", ".join(profile.primary_services or ()) or default_services(industry_key, settings),
        response_time_goal=profile.response_time_goal,
        response_time_phrase=response_time_phrase,
        business_hours=profile.business_hours,
        service_area_radius=profile.service_area_radius,
        degraded=tuple(degraded),
    )
