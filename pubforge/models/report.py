"""Run report models: publications plus the warnings raised while building them."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from pubforge.models.channel import RunContext
from pubforge.models.publication import Publication


class WarningCode(str, Enum):
    """Non-fatal conditions that degrade a capability but keep the run going."""

    CHANNEL_AMBIGUOUS = "channel_ambiguous"
    CREDENTIAL_INCOMPLETE = "credential_incomplete"
    SIGNING_SKIPPED = "signing_skipped"


class RunWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: WarningCode
    message: str
    module: str | None = None  # None for run-wide warnings


class ReleaseReport(BaseModel):
    """Outcome of a complete configuration pass over every module."""

    model_config = ConfigDict(frozen=True)

    context: RunContext
    publications: list[Publication] = []
    warnings: list[RunWarning] = []

    def publication(self, module: str) -> Publication:
        for pub in self.publications:
            if pub.module == module:
                return pub
        raise KeyError(module)

    def warnings_for(self, module: str) -> list[RunWarning]:
        return [w for w in self.warnings if w.module == module]
