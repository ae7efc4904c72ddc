"""Unit tests for the CLI: Typer command registration and exit behavior.

Exercised via typer.testing.CliRunner against manifests in a temp directory.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

import pubforge
from pubforge.cli.app import app
from pubforge.cli.commands import credentials as credentials_module
from pubforge.cli.commands import keygen as keygen_module
from pubforge.cli.commands import publish as publish_module
from pubforge.core.credential_resolver import (
    OWNER_KEY,
    REPOSITORY_CREDENTIAL_KEYS,
    SIGNING_CREDENTIAL_KEYS,
    VERSION_KEY,
)

runner = CliRunner()

MANIFEST = """
[[modules]]
name = "lumen-core"
outputs = ["lumen-core/build/outputs/aar/lumen-core-release.aar"]

[[modules]]
name = "lumen"
dependencies = ["lumen-core"]
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run every command in an empty project without ambient credentials."""
    for key in (
        *REPOSITORY_CREDENTIAL_KEYS,
        *SIGNING_CREDENTIAL_KEYS,
        VERSION_KEY,
        OWNER_KEY,
        "JITPACK",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    # Wide consoles so tables are not folded in captured output
    for module in (publish_module, credentials_module, keygen_module):
        monkeypatch.setattr(module, "console", Console(width=200))
    (tmp_path / "pubforge.toml").write_text(MANIFEST, encoding="utf-8")
    (tmp_path / "gradle.properties").write_text("VERSION_NAME=2.3.0\n", encoding="utf-8")
    return tmp_path


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestCliApp:
    """The Typer app is reachable from the package root and lists every command."""

    def test_package_root_keeps_cli_subpackage(self):
        """Exporting the app must not shadow the ``pubforge.cli`` subpackage."""
        assert pubforge.app is app
        assert pubforge.cli.commands.publish is publish_module

    def test_no_args_shows_help(self):
        """Running without a command prints usage instead of failing silently."""
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_lists_commands(self):
        """--help names plan, publish, credentials and keygen."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("plan", "publish", "credentials", "keygen"):
            assert command in result.output


# ---------------------------------------------------------------------------
# plan / publish
# ---------------------------------------------------------------------------


class TestPlanCommand:
    """plan resolves everything and prints it without touching disk."""

    def test_plan_prints_publications(self):
        """plan shows central coordinates and writes nothing."""
        result = runner.invoke(app, ["plan"])
        assert result.exit_code == 0, result.output
        assert "io.github.XichenX:lumen-core:2.3.0" in result.output
        assert not Path("build/publications").exists()

    def test_plan_peer_distribution(self):
        """JITPACK=true switches plan output to com.github coordinates."""
        result = runner.invoke(app, ["plan"], env={"JITPACK": "true"})
        assert result.exit_code == 0, result.output
        assert "com.github.XichenX:lumen-core:2.3.0" in result.output


class TestPublishCommand:
    """publish writes descriptors, or exits 1 on a fatal configuration error."""

    def test_publish_writes_descriptors(self, clean_env: Path):
        """publish writes one descriptor per module plus the run report."""
        result = runner.invoke(app, ["publish", "--output", "out"])
        assert result.exit_code == 0, result.output

        descriptor = json.loads(
            (clean_env / "out" / "lumen-core-2.3.0.publication.json").read_text()
        )
        assert descriptor["repositories"][0]["url"].endswith("staging/deploy/maven2/")
        assert descriptor["signed"] is False
        assert (clean_env / "out" / "release-report.json").exists()

    def test_publish_signs_with_key(self, clean_env: Path, signing_env):
        """With a usable key every descriptor is signed and gets a .sig file."""
        result = runner.invoke(app, ["publish", "--output", "out"], env=signing_env)
        assert result.exit_code == 0, result.output
        descriptor = json.loads(
            (clean_env / "out" / "lumen-2.3.0.publication.json").read_text()
        )
        assert descriptor["signed"] is True
        assert (clean_env / "out" / "lumen-2.3.0.publication.json.sig").exists()

    def test_unsigned_republish_clears_signatures(self, clean_env: Path, signing_env):
        """Publishing again without a key leaves no signature from the signed run."""
        signed = runner.invoke(app, ["publish", "--output", "out"], env=signing_env)
        assert signed.exit_code == 0, signed.output
        assert list((clean_env / "out").glob("*.sig"))

        unsigned = runner.invoke(app, ["publish", "--output", "out"])
        assert unsigned.exit_code == 0, unsigned.output
        assert list((clean_env / "out").glob("*.sig")) == []

    def test_missing_publishing_subsystem_exits_nonzero(self, clean_env: Path):
        """A module without the publishing subsystem aborts with exit code 1."""
        (clean_env / "pubforge.toml").write_text(
            '[[modules]]\nname = "lumen-view"\npublishing = false\n', encoding="utf-8"
        )
        result = runner.invoke(app, ["publish"])
        assert result.exit_code == 1
        assert "lumen-view" in result.output

    def test_corrupt_key_exits_nonzero(self, clean_env: Path, signing_env):
        """Unreadable key material aborts before any descriptor is written."""
        bad = clean_env / "bad.key"
        bad.write_text("garbage", encoding="utf-8")
        env = {**signing_env, "SIGNING_SECRET_KEY_RING_FILE": str(bad)}
        result = runner.invoke(app, ["publish"], env=env)
        assert result.exit_code == 1
        assert not (clean_env / "build" / "publications").exists()

    def test_missing_manifest_exits_nonzero(self):
        """A missing manifest is reported and exits with code 1."""
        result = runner.invoke(app, ["plan", "--manifest", "nope.toml"])
        assert result.exit_code == 1
        assert "not found" in result.output


# ---------------------------------------------------------------------------
# credentials / keygen
# ---------------------------------------------------------------------------


class TestCredentialsCommand:
    """credentials reports status only."""

    def test_reports_status_without_values(self):
        """Credential status shows set/not set and lengths, never the values."""
        result = runner.invoke(
            app, ["credentials"], env={"SONATYPE_PASSWORD": "super-secret-value"}
        )
        assert result.exit_code == 0, result.output
        assert "SONATYPE_USERNAME" in result.output
        assert "not set" in result.output
        assert "set (18 chars)" in result.output
        assert "super-secret-value" not in result.output


class TestKeygenCommand:
    """keygen creates protected signing keys."""

    def test_keygen_writes_usable_key(self, clean_env: Path):
        """keygen writes an armored key file and prints its key id."""
        result = runner.invoke(app, ["keygen", "keys/release.key", "--password", "pw"])
        assert result.exit_code == 0, result.output
        key_file = clean_env / "keys" / "release.key"
        assert key_file.read_text().startswith("-----BEGIN PUBFORGE SIGNING KEY-----")
        assert "Key id:" in result.output

    def test_keygen_refuses_overwrite(self, clean_env: Path):
        """An existing key file is left untouched without --force."""
        (clean_env / "existing.key").write_text("keep me", encoding="utf-8")
        result = runner.invoke(app, ["keygen", "existing.key", "--password", "pw"])
        assert result.exit_code == 1
        assert (clean_env / "existing.key").read_text() == "keep me"
