"""Tests for tool settings: env-driven via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from pubforge.config import SONATYPE_RELEASE_URL, SONATYPE_SNAPSHOT_URL, PublishSettings


class TestPublishSettings:
    """Settings defaults and PUBFORGE_ environment overrides."""

    def test_defaults(self):
        """Default channel flag, owner and version match the Gradle build."""
        settings = PublishSettings()
        assert settings.log_level == "INFO"
        assert settings.channel_flag == "JITPACK"
        assert settings.default_owner == "XichenX"
        assert settings.default_version == "1.0.0"

    def test_default_paths(self):
        """Manifest, properties and output paths default to the project root layout."""
        settings = PublishSettings()
        assert settings.manifest_path == Path("pubforge.toml")
        assert settings.properties_path == Path("gradle.properties")
        assert settings.output_dir == Path("build/publications")

    def test_default_endpoints(self):
        """Release and snapshot URLs default to the Sonatype s01 endpoints."""
        settings = PublishSettings()
        assert settings.release_url == SONATYPE_RELEASE_URL
        assert settings.snapshot_url == SONATYPE_SNAPSHOT_URL
        assert "staging/deploy" in settings.release_url
        assert "snapshots" in settings.snapshot_url

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch):
        """PUBFORGE_* variables override the defaults."""
        monkeypatch.setenv("PUBFORGE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PUBFORGE_OUTPUT_DIR", "/tmp/out")
        settings = PublishSettings()
        assert settings.log_level == "DEBUG"
        assert settings.output_dir == Path("/tmp/out")
