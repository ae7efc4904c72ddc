"""Distribution channel and publication identity models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Channel(str, Enum):
    """Where the run's publications are distributed.

    Fixed for the whole run; never mixed across modules.
    """

    PEER_DISTRIBUTION = "peer_distribution"  # JitPack builds from the git tag
    CENTRAL_REGISTRY = "central_registry"  # pushed to Sonatype / Maven Central


# groupId prefix per channel; the owner is appended as the last segment.
GROUP_ID_PREFIXES: dict[Channel, str] = {
    Channel.PEER_DISTRIBUTION: "com.github",
    Channel.CENTRAL_REGISTRY: "io.github",
}


class Identity(BaseModel):
    """Maven coordinates stamped on a publication."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str
    version: str

    @property
    def is_snapshot(self) -> bool:
        """Whether the version carries the (case-sensitive) SNAPSHOT suffix."""
        return self.version.endswith("SNAPSHOT")

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class RunContext(BaseModel):
    """Process-wide publishing inputs, resolved once per invocation.

    Every component receives this value explicitly instead of reading the
    environment on its own.
    """

    model_config = ConfigDict(frozen=True)

    channel: Channel
    owner: str
    version: str

    @property
    def group_id(self) -> str:
        return f"{GROUP_ID_PREFIXES[self.channel]}.{self.owner}"
