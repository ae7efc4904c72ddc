"""Signing orchestrator: signs publications when the key is fully available.

State machine per publication::

    UNATTEMPTED -> SKIPPED_BY_CHANNEL                   (peer distribution)
    UNATTEMPTED -> SKIPPED_INCOMPLETE                   (anything missing or blank)
    UNATTEMPTED -> attempting -> SIGNED                 (key decoded and applied)
                              -> KeyMaterialError       (fatal)

Missing configuration only degrades the run: the publication stays valid,
unsigned, and a warning is recorded.  Key material that is present but cannot
be read or applied is an operator error and stops the release.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from pubforge.bridge.crypto_bridge import (
    import_signing_key,
    key_fingerprint,
    key_id_matches,
    public_key_for,
    sign_data,
)
from pubforge.core.credential_resolver import (
    SIGNING_KEY_FILE_KEY,
    SIGNING_KEY_ID_KEY,
    SIGNING_PASSWORD_KEY,
)
from pubforge.core.errors import PublishError
from pubforge.models.channel import Channel
from pubforge.models.credentials import SigningCredentials
from pubforge.models.publication import Publication, Signature, SigningState
from pubforge.models.report import RunWarning, WarningCode

logger = logging.getLogger(__name__)

_FIELD_KEYS = {
    "key_id": SIGNING_KEY_ID_KEY,
    "password": SIGNING_PASSWORD_KEY,
    "key_file": SIGNING_KEY_FILE_KEY,
}


class KeyMaterialError(PublishError):
    """Raised when signing key material is present but unreadable or malformed."""


class SigningOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    publication: Publication
    state: SigningState
    warnings: list[RunWarning] = []


class SigningOrchestrator:
    """Decides whether to sign and binds the signature to the publication."""

    def __init__(self, channel: Channel, *, base_dir: Path | None = None) -> None:
        self.channel = channel
        self.base_dir = base_dir

    def sign(
        self, publication: Publication, credentials: SigningCredentials
    ) -> SigningOutcome:
        if self.channel == Channel.PEER_DISTRIBUTION:
            return self._skip(publication, SigningState.SKIPPED_BY_CHANNEL)

        missing = credentials.missing_fields()
        if missing:
            for name in ("key_id", "password", "key_file"):
                logger.debug(
                    "  %s: %s", _FIELD_KEYS[name], "not set" if name in missing else "set"
                )
            return self._skip_incomplete(
                publication,
                "Signing credentials not fully configured ("
                + ", ".join(f"{_FIELD_KEYS[name]} not set" for name in missing)
                + "), skipping signing",
            )

        key_path = credentials.key_path
        if self.base_dir is not None and not key_path.is_absolute():
            key_path = self.base_dir / key_path
        if not key_path.exists():
            return self._skip_incomplete(
                publication, f"Signing key file not found: {key_path}, skipping signing"
            )

        armored = self._read_key_file(key_path)
        if not armored.strip():
            return self._skip_incomplete(
                publication, f"Signing key file is empty: {key_path}, skipping signing"
            )

        signature = self._apply_key(publication, credentials, armored)
        logger.info("Signing configured for %s (key %s)", publication.module, signature.key_id)
        return SigningOutcome(
            publication=publication.model_copy(
                update={"signature": signature, "signing_state": SigningState.SIGNED}
            ),
            state=SigningState.SIGNED,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _read_key_file(key_path: Path) -> str:
        try:
            return key_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read signing key %s: %s", key_path, exc)
            raise KeyMaterialError(
                f"Signing key file {key_path} exists but cannot be read: {exc}"
            ) from exc

    @staticmethod
    def _apply_key(
        publication: Publication, credentials: SigningCredentials, armored: str
    ) -> Signature:
        key_id = credentials.key_id.strip()
        try:
            private_key = import_signing_key(armored, credentials.password)
            public_key = public_key_for(private_key)
            if not key_id_matches(key_id, public_key):
                raise ValueError(
                    f"configured key id {key_id!r} does not match key "
                    f"{key_fingerprint(public_key)}"
                )
            value = sign_data(publication.signing_bytes(), private_key)
        except Exception as exc:
            logger.error("Failed to configure signing for %s: %s", publication.module, exc)
            raise KeyMaterialError(
                f"Failed to configure signing for {publication.module}: {exc}"
            ) from exc

        return Signature(
            key_id=key_fingerprint(public_key),
            public_key=public_key,
            value=value,
            digest=publication.payload_digest(),
        )

    @staticmethod
    def _skip(publication: Publication, state: SigningState) -> SigningOutcome:
        return SigningOutcome(
            publication=publication.model_copy(update={"signing_state": state}),
            state=state,
        )

    def _skip_incomplete(self, publication: Publication, message: str) -> SigningOutcome:
        logger.warning("%s [%s]", message, publication.module)
        outcome = self._skip(publication, SigningState.SKIPPED_INCOMPLETE)
        return outcome.model_copy(update={
            "warnings": [
                RunWarning(
                    code=WarningCode.SIGNING_SKIPPED,
                    message=message,
                    module=publication.module,
                )
            ]
        })
