"""Shared test fixtures for pubforge."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from pubforge.bridge.crypto_bridge import export_signing_key, generate_keypair, key_fingerprint
from pubforge.config import PublishSettings
from pubforge.core.orchestrator import ReleaseOrchestrator
from pubforge.models.channel import Channel, RunContext
from pubforge.models.manifest import Module, ProjectMetadata, ReleaseManifest

SIGNING_PASSWORD = "correct horse battery staple"


@dataclass(frozen=True)
class SigningKey:
    """A generated key written to disk, plus what is needed to use it."""

    path: Path
    key_id: str
    password: str
    public_key: str
    private_key: str


# ---------------------------------------------------------------------------
# Signing material
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def signing_key(tmp_path_factory: pytest.TempPathFactory) -> SigningKey:
    """One password-protected key file for the whole session (Argon2 is slow)."""
    private_key, public_key = generate_keypair()
    path = tmp_path_factory.mktemp("keys") / "secring.key"
    path.write_text(export_signing_key(private_key, SIGNING_PASSWORD), encoding="utf-8")
    return SigningKey(
        path=path,
        key_id=key_fingerprint(public_key),
        password=SIGNING_PASSWORD,
        public_key=public_key,
        private_key=private_key,
    )


@pytest.fixture
def signing_env(signing_key: SigningKey) -> dict[str, str]:
    """Environment with complete signing credentials."""
    return {
        "SIGNING_KEY_ID": signing_key.key_id,
        "SIGNING_PASSWORD": signing_key.password,
        "SIGNING_SECRET_KEY_RING_FILE": str(signing_key.path),
    }


@pytest.fixture
def repository_env() -> dict[str, str]:
    """Environment with complete Sonatype credentials."""
    return {"SONATYPE_USERNAME": "xichen", "SONATYPE_PASSWORD": "s3cr3t-token"}


# ---------------------------------------------------------------------------
# Modules and contexts
# ---------------------------------------------------------------------------


@pytest.fixture
def core_module() -> Module:
    return Module(
        name="lumen-core",
        outputs=["lumen-core/build/outputs/aar/lumen-core-release.aar"],
    )


@pytest.fixture
def manifest() -> ReleaseManifest:
    """The Lumen layout: three library modules and the ``lumen`` facade."""
    members = ["lumen-core", "lumen-view", "lumen-transform"]
    modules = [
        Module(name=name, outputs=[f"{name}/build/outputs/aar/{name}-release.aar"])
        for name in members
    ]
    modules.append(Module(name="lumen", dependencies=members))
    return ReleaseManifest(project=ProjectMetadata(), modules=modules)


@pytest.fixture
def central_context() -> RunContext:
    return RunContext(channel=Channel.CENTRAL_REGISTRY, owner="XichenX", version="2.3.0")


@pytest.fixture
def peer_context() -> RunContext:
    return RunContext(channel=Channel.PEER_DISTRIBUTION, owner="XichenX", version="2.3.0")


@pytest.fixture
def make_orchestrator(manifest: ReleaseManifest) -> Callable[..., ReleaseOrchestrator]:
    """Factory fixture: orchestrator over the Lumen manifest with an explicit env."""

    def _factory(
        environ: dict[str, str] | None = None,
        properties: dict[str, str] | None = None,
        **overrides: Any,
    ) -> ReleaseOrchestrator:
        return ReleaseOrchestrator(
            overrides.pop("manifest", manifest),
            properties=properties or {},
            environ=environ or {},
            settings=overrides.pop("settings", PublishSettings()),
            **overrides,
        )

    return _factory
