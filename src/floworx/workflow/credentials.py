"""Tenant-scoped credential references for channel nodes."""

from __future__ import annotations

from .catalog import ChannelSpec, get_channel
from .schema import CredentialRef


def bind_credentials(user_id: str, company_name: str, channel: ChannelSpec | str = "gmail") -> CredentialRef:
    """Derive the credential handle the execution runtime resolves for this tenant.

    Pure derivation: nothing is looked up or checked against a credential store,
    so the same tenant always gets the same handle.
    """
    spec = get_channel(channel) if isinstance(channel, str) else channel
    if spec is None:
        raise ValueError(f"Unknown channel: {channel}")
    return CredentialRef(
        id=f"user_{user_id}_{spec.key}",
        name=f"{company_name} {spec.display_name}",
    )


def credential_block(credential: CredentialRef, channel: ChannelSpec) -> dict[str, CredentialRef]:
    """The ``credentials`` payload of a channel node."""
    return {channel.credential_type: credential}
