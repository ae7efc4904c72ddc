"""Repository selection: where a publication is uploaded.

Peer distribution (JitPack) builds from the repository itself, so nothing is
pushed and no target is attached.  The central registry gets exactly one
target, the snapshot or staging endpoint depending on the version suffix.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from pubforge.config import SONATYPE_RELEASE_URL, SONATYPE_SNAPSHOT_URL
from pubforge.core.credential_resolver import SONATYPE_PASSWORD_KEY, SONATYPE_USERNAME_KEY
from pubforge.models.channel import Channel
from pubforge.models.credentials import (
    RepositoryCredentials,
    describe_secret,
    mask_username,
)
from pubforge.models.publication import Publication, RepositoryTarget
from pubforge.models.report import RunWarning, WarningCode

logger = logging.getLogger(__name__)

CENTRAL_REPOSITORY_NAME = "MavenCentral"


class RepositorySelection(BaseModel):
    """The publication with its targets attached, plus any warnings."""

    model_config = ConfigDict(frozen=True)

    publication: Publication
    warnings: list[RunWarning] = []


def endpoint_for(version: str, *, release_url: str, snapshot_url: str) -> str:
    return snapshot_url if version.endswith("SNAPSHOT") else release_url


class RepositorySelector:
    """Attaches upload targets to publications for the run's channel."""

    def __init__(
        self,
        channel: Channel,
        *,
        release_url: str = SONATYPE_RELEASE_URL,
        snapshot_url: str = SONATYPE_SNAPSHOT_URL,
    ) -> None:
        self.channel = channel
        self.release_url = release_url
        self.snapshot_url = snapshot_url

    def select(
        self, publication: Publication, credentials: RepositoryCredentials
    ) -> RepositorySelection:
        if self.channel == Channel.PEER_DISTRIBUTION:
            return RepositorySelection(publication=publication)

        target = RepositoryTarget(
            name=CENTRAL_REPOSITORY_NAME,
            url=endpoint_for(
                publication.identity.version,
                release_url=self.release_url,
                snapshot_url=self.snapshot_url,
            ),
            credentials=credentials,
        )
        warnings = self._check_credentials(publication.module, credentials)
        return RepositorySelection(
            publication=publication.model_copy(update={"repositories": [target]}),
            warnings=warnings,
        )

    @staticmethod
    def _check_credentials(
        module: str, credentials: RepositoryCredentials
    ) -> list[RunWarning]:
        # The uploader owns the failure; this only makes it diagnosable early.
        if credentials.is_complete:
            logger.info(
                "Sonatype credentials configured for %s (username: %s, password: %s)",
                module,
                mask_username(credentials.username or ""),
                "*" * len(credentials.password or ""),
            )
            return []

        message = (
            "Sonatype credentials are missing or empty: "
            f"{SONATYPE_USERNAME_KEY}: {describe_secret(credentials.username)}, "
            f"{SONATYPE_PASSWORD_KEY}: {describe_secret(credentials.password)}"
        )
        logger.warning("%s [%s]", message, module)
        return [
            RunWarning(code=WarningCode.CREDENTIAL_INCOMPLETE, message=message, module=module)
        ]
