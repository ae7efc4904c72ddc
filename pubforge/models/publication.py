"""Publication records: what gets published, where, and whether it is signed.

All models are frozen.  Pipeline steps never mutate a ``Publication``; they
return an updated copy via ``model_copy(update=...)`` so no partially
configured record is ever observable.
"""

from __future__ import annotations

import hashlib
import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from pubforge.models.channel import Identity
from pubforge.models.credentials import RepositoryCredentials
from pubforge.models.manifest import MetadataBlock


class SigningState(str, Enum):
    """Signing lifecycle of one publication."""

    UNATTEMPTED = "unattempted"
    SKIPPED_BY_CHANNEL = "skipped_by_channel"
    SKIPPED_INCOMPLETE = "skipped_incomplete"
    SIGNED = "signed"


class Artifact(BaseModel):
    """One file attached to a publication (main archive or classifier jar)."""

    model_config = ConfigDict(frozen=True)

    file: str
    extension: str
    classifier: str | None = None


class Dependency(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: Identity
    scope: str = "compile"


class RepositoryTarget(BaseModel):
    """An upload endpoint together with the credentials it requires.

    Credentials are stored exactly as resolved, complete or not.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    credentials: RepositoryCredentials = RepositoryCredentials()


class Signature(BaseModel):
    """Detached Ed25519 signature over the canonical publication payload."""

    model_config = ConfigDict(frozen=True)

    key_id: str
    public_key: str  # hex
    value: str  # hex
    digest: str  # "sha256:<hex>" of the signed payload
    algorithm: str = "ed25519"


class Publication(BaseModel):
    """The publication record for one module in one run."""

    model_config = ConfigDict(frozen=True)

    name: str = "release"
    module: str
    identity: Identity
    packaging: str = "aar"
    artifacts: list[Artifact] = []
    dependencies: list[Dependency] = []
    metadata: MetadataBlock
    repositories: list[RepositoryTarget] = []
    signature: Signature | None = None
    signing_state: SigningState = SigningState.UNATTEMPTED

    @property
    def signed(self) -> bool:
        return self.signing_state == SigningState.SIGNED and self.signature is not None

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def signing_payload(self) -> dict[str, Any]:
        """The content covered by the signature.

        Repository targets and the signature itself are excluded: they say
        where the content goes, not what it is.
        """
        return {
            "groupId": self.identity.group_id,
            "artifactId": self.identity.artifact_id,
            "version": self.identity.version,
            "packaging": self.packaging,
            "artifacts": [
                {"file": a.file, "extension": a.extension, "classifier": a.classifier}
                for a in self.artifacts
            ],
            "dependencies": [
                {
                    "groupId": d.identity.group_id,
                    "artifactId": d.identity.artifact_id,
                    "version": d.identity.version,
                    "scope": d.scope,
                }
                for d in self.dependencies
            ],
            "metadata": {
                "name": self.metadata.name,
                "description": self.metadata.description,
                "url": self.metadata.url,
                "licenses": [lic.model_dump() for lic in self.metadata.licenses],
                "developers": [d.model_dump() for d in self.metadata.developers],
                "scm": {
                    "connection": self.metadata.scm.connection,
                    "developerConnection": self.metadata.scm.developer_connection,
                    "url": self.metadata.scm.url,
                },
            },
        }

    def signing_bytes(self) -> bytes:
        """Sorted-key, compact, ASCII-only JSON of :meth:`signing_payload`.

        The same publication always yields the same bytes, whatever the
        insertion order of the underlying dicts.
        """
        return json.dumps(
            self.signing_payload(), sort_keys=True, separators=(",", ":"), ensure_ascii=True
        ).encode("utf-8")

    def payload_digest(self) -> str:
        return "sha256:" + hashlib.sha256(self.signing_bytes()).hexdigest()

    def to_descriptor(self) -> dict[str, Any]:
        """Full publication descriptor; passwords are reduced to a flag."""
        descriptor = self.signing_payload()
        repositories: list[dict[str, Any]] = []
        for target in self.repositories:
            creds = target.credentials
            repositories.append({
                "name": target.name,
                "url": target.url,
                "credentials": {
                    "username": creds.username,
                    "passwordSet": bool(creds.password and creds.password.strip()),
                },
            })
        descriptor["repositories"] = repositories
        descriptor["signed"] = self.signed
        if self.signature is not None:
            descriptor["signature"] = self.signature.model_dump()
        return descriptor
