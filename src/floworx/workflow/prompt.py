"""System prompt for the AI classifier node."""

from __future__ import annotations

from .catalog import PHONE_PROVIDER_SENDERS
from .schema import NormalizedProfile

TASK_INSTRUCTIONS = """\
Your SOLE task is to analyze the provided email and return a single, structured JSON object \
containing a summary, precise classifications, and extracted entities. Follow all rules precisely.\
"""

PHONE_NOTIFICATION_KINDS = (
    "Voicemail transcripts",
    "Missed call alerts",
    "SMS/text message notifications",
    "Call recordings",
)

REPLY_RULE = """\
If the email is from an external sender, and primary_category is Support or Sales, and confidence \
is at least 0.75, always set "ai_can_reply": true, including for Support > General complaints, \
unless the sender is internal or the message is abusive/illegal.\
"""


def _format_radius(radius: float) -> str:
    return f"{radius:g} miles"


def _business_information(profile: NormalizedProfile, channel_provider: str | None) -> list[str]:
    # Absent fields are left out entirely rather than rendered as placeholders
    facts = [
        ("Company", profile.display_name),
        ("Industry", profile.industry_description),
        ("Phone", profile.business_phone),
        ("Emergency Phone", profile.emergency_phone),
        ("Address", profile.business_address),
        ("Service Area", _format_radius(profile.service_area_radius) if profile.service_area_radius is not None else None),
        ("Services", profile.services_phrase),
        ("Response Time Goal", profile.response_time_phrase),
        ("Business Hours", profile.business_hours),
        ("Phone System", channel_provider),
    ]
    return [f"- {label}: {value}" for label, value in facts if value]


def _phone_section(channel_provider: str | None) -> str:
    source = f"{channel_provider} notifications" if channel_provider else "phone system notifications"
    lines = [f"Phone category applies to emails from {source} including:"]
    lines += [f"- {kind}" for kind in PHONE_NOTIFICATION_KINDS]
    sender = PHONE_PROVIDER_SENDERS.get((channel_provider or "").lower())
    if sender:
        lines.append(f"- Emails from {sender}")
    return "\n".join(lines)


def compose_prompt(
    profile: NormalizedProfile,
    managers: list[str],
    suppliers: list[str],
    channel_provider: str | None = None,
) -> str:
    """Build the classifier system message for one business.

    ``managers`` and ``suppliers`` must already be capped; every name passed in
    appears in the message.
    """
    provider = channel_provider.strip() if channel_provider and channel_provider.strip() else None

    message = (
        f'You are an expert email processing and routing system for "{profile.display_name}", '
        f"a {profile.industry_description}.\n\n"
        f"{TASK_INSTRUCTIONS}\n\n"
        "### Business Information:\n"
    )
    message += "\n".join(_business_information(profile, provider))

    if managers:
        message += "\n\n### Custom Team Members:"
        for manager in managers:
            message += f"\n- Manager: {manager}"

    if suppliers:
        message += "\n\n### Custom Suppliers:"
        for supplier in suppliers:
            message += f"\n- {supplier}"

    message += f"\n\n### Phone System Integration:\n{_phone_section(provider)}"

    message += f"\n\n### Rules:\n{REPLY_RULE}\n\n"
    if profile.email_domain:
        message += f'If the sender\'s email address ends with @{profile.email_domain}, always set: "ai_can_reply": false'
    else:
        message += 'If the sender is a member of the business itself, always set: "ai_can_reply": false'

    return message
