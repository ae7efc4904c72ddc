"""pubforge data models: all Pydantic v2, all frozen (immutable)."""

from pubforge.models.channel import GROUP_ID_PREFIXES, Channel, Identity, RunContext
from pubforge.models.credentials import RepositoryCredentials, SigningCredentials
from pubforge.models.manifest import (
    Developer,
    License,
    MetadataBlock,
    Module,
    ProjectMetadata,
    ReleaseManifest,
    Scm,
)
from pubforge.models.publication import (
    Artifact,
    Dependency,
    Publication,
    RepositoryTarget,
    Signature,
    SigningState,
)
from pubforge.models.report import ReleaseReport, RunWarning, WarningCode

__all__ = [
    # channel
    "Channel",
    "GROUP_ID_PREFIXES",
    "Identity",
    "RunContext",
    # credentials
    "RepositoryCredentials",
    "SigningCredentials",
    # manifest
    "Developer",
    "License",
    "MetadataBlock",
    "Module",
    "ProjectMetadata",
    "ReleaseManifest",
    "Scm",
    # publication
    "Artifact",
    "Dependency",
    "Publication",
    "RepositoryTarget",
    "Signature",
    "SigningState",
    # report
    "ReleaseReport",
    "RunWarning",
    "WarningCode",
]
