"""Channel and identity resolution: runs once per invocation.

The channel is read from a single environment flag (``JITPACK`` by default).
Owner and version are resolved through the credential resolver chain with
fixed fallbacks.  The result is a frozen :class:`RunContext`; identical
properties and environment always produce an identical context.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pubforge.config import PublishSettings
from pubforge.core.credential_resolver import OWNER_KEY, VERSION_KEY, CredentialResolver
from pubforge.models.channel import Channel, Identity, RunContext
from pubforge.models.manifest import Module
from pubforge.models.report import RunWarning, WarningCode

logger = logging.getLogger(__name__)

_PEER_VALUE = "true"
_CENTRAL_VALUE = "false"


def resolve_channel(
    flag_value: str | None, *, flag_name: str = "JITPACK"
) -> tuple[Channel, RunWarning | None]:
    """Map the channel flag to a :class:`Channel`.

    Peer distribution is selected only by the exact string ``"true"``.  Unset,
    blank and ``"false"`` mean the central registry; anything else
    (``"TRUE"``, ``" true"``, ``"1"``) also falls back to the central registry,
    with a warning.
    """
    value = flag_value or ""
    if value == _PEER_VALUE:
        return Channel.PEER_DISTRIBUTION, None
    if not value.strip() or value == _CENTRAL_VALUE:
        return Channel.CENTRAL_REGISTRY, None

    message = (
        f"Unrecognized {flag_name} value {flag_value!r}; "
        "defaulting to central registry publishing."
    )
    logger.warning(message)
    return Channel.CENTRAL_REGISTRY, RunWarning(
        code=WarningCode.CHANNEL_AMBIGUOUS, message=message
    )


def resolve_run_context(
    resolver: CredentialResolver,
    environ: Mapping[str, str],
    settings: PublishSettings | None = None,
) -> tuple[RunContext, list[RunWarning]]:
    """Resolve channel, owner and version for the whole run.

    The channel flag is read from *environ* only; it is a property of the
    invocation, not of the project.
    """
    settings = settings or PublishSettings()
    channel, warning = resolve_channel(
        environ.get(settings.channel_flag), flag_name=settings.channel_flag
    )
    context = RunContext(
        channel=channel,
        owner=resolver.resolve_or(OWNER_KEY, settings.default_owner).strip(),
        version=resolver.resolve_or(VERSION_KEY, settings.default_version).strip(),
    )
    logger.info(
        "Publishing %s as %s (channel: %s)",
        context.version,
        context.group_id,
        context.channel.value,
    )
    return context, [warning] if warning else []


def identity_for(module: Module, context: RunContext) -> Identity:
    """Coordinates for *module*, honouring per-module overrides."""
    return Identity(
        group_id=module.group_id or context.group_id,
        artifact_id=module.artifact_id or module.name,
        version=context.version,
    )
