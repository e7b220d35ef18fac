"""Lookup tables driving profile normalization and graph assembly.

Everything here is data. Adding an industry, a response-time code or a phone
provider means adding an entry, either below or through the
``industry_descriptions`` / ``response_time_phrases`` / ``default_services``
settings.
"""

from __future__ import annotations

from pydantic import BaseModel

from ..config import Settings

GENERIC_BUSINESS_DESCRIPTION = "service business"
GENERIC_RESPONSE_TIME = "as soon as possible"

INDUSTRY_DESCRIPTIONS: dict[str, str] = {
    "hot-tub-spa": "hot tub and spa service business",
    "hvac": "HVAC service business",
    "plumbing": "plumbing service business",
    "landscaping": "landscaping service business",
    "service-business": GENERIC_BUSINESS_DESCRIPTION,
}

RESPONSE_TIME_PHRASES: dict[str, str] = {
    "1_hour": "Within 1 hour",
    "4_hours": "Within 4 hours",
    "24_hours": "Within 24 hours",
    "48_hours": "Within 48 hours",
}

# Services named in the prompt when the profile lists none
GENERIC_SERVICES = "Professional services"

DEFAULT_SERVICES: dict[str, str] = {
    "hot-tub-spa": "Hot tub installation, repair, maintenance, water care",
    "hvac": "Heating, cooling, HVAC installation and repair",
    "plumbing": "Plumbing repair, installation, drain cleaning",
    "landscaping": "Lawn care, landscaping, tree service, irrigation",
    "service-business": GENERIC_SERVICES,
}

# Known notification senders per phone provider, keyed by lowercase label
PHONE_PROVIDER_SENDERS: dict[str, str] = {
    "ringcentral": "service@ringcentral.com",
}

# Categories the AI classifier emits as parsed_output.primary_category,
# in Category Switch output order
STANDARD_CATEGORIES: tuple[str, ...] = (
    "Urgent",
    "Sales",
    "Support",
    "Banking",
    "Manager",
    "Suppliers",
    "FormSub",
    "Phone",
    "Misc",
)


class ChannelSpec(BaseModel):
    """A communication channel whose nodes need tenant-scoped OAuth credentials."""

    key: str
    display_name: str
    credential_type: str
    trigger_type: str
    trigger_type_version: float
    action_type: str
    action_type_version: float


CHANNELS: dict[str, ChannelSpec] = {
    "gmail": ChannelSpec(
        key="gmail",
        display_name="Gmail",
        credential_type="gmailOAuth2",
        trigger_type="n8n-nodes-base.gmailTrigger",
        trigger_type_version=1.2,
        action_type="n8n-nodes-base.gmail",
        action_type_version=2.1,
    ),
}

DEFAULT_CHANNEL = "gmail"


def industry_table(settings: Settings) -> dict[str, str]:
    return {**INDUSTRY_DESCRIPTIONS, **{k.lower(): v for k, v in settings.industry_descriptions.items()}}


def response_time_table(settings: Settings) -> dict[str, str]:
    return {**RESPONSE_TIME_PHRASES, **settings.response_time_phrases}


def describe_industry(industry_key: str | None, settings: Settings) -> str:
    """Return the human description for an industry key.

    Unknown keys keep the raw key so the prompt still says what the business does.
    """
    if not industry_key:
        return GENERIC_BUSINESS_DESCRIPTION
    description = industry_table(settings).get(industry_key.lower())
    if description is not None:
        return description
    return f"{GENERIC_BUSINESS_DESCRIPTION} in the {industry_key} industry"


def phrase_response_time(code: str | None, settings: Settings) -> str:
    if not code:
        return GENERIC_RESPONSE_TIME
    return response_time_table(settings).get(code, GENERIC_RESPONSE_TIME)


def get_channel(key: str | None) -> ChannelSpec | None:
    if key is None:
        key = DEFAULT_CHANNEL
    if not isinstance(key, str):
        return None
    return CHANNELS.get(key.strip().lower() or DEFAULT_CHANNEL)


def default_services(industry_key: str | None, settings: Settings) -> str:
    table = {**DEFAULT_SERVICES, **{k.lower(): v for k, v in settings.default_services.items()}}
    return table.get((industry_key or "").lower(), GENERIC_SERVICES)
