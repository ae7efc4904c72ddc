"""Tool configuration: env-driven via pydantic-settings.

Reads from a .env file and PUBFORGE_* environment variables.  These settings
describe how pubforge itself runs (where the manifest lives, which endpoints
to target); the release inputs proper (version, owner, credentials) are
resolved per run by :mod:`pubforge.core.credential_resolver`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

SONATYPE_RELEASE_URL = "https://s01.oss.sonatype.org/service/local/staging/deploy/maven2/"
SONATYPE_SNAPSHOT_URL = "https://s01.oss.sonatype.org/content/repositories/snapshots/"


class PublishSettings(BaseSettings):
    """pubforge settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PUBFORGE_LOG_LEVEL=DEBUG
        export PUBFORGE_OUTPUT_DIR=/tmp/publications

    Or via .env file::

        PUBFORGE_MANIFEST_PATH=release/pubforge.toml
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PUBFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Declared configuration
    manifest_path: Path = Path("pubforge.toml")
    properties_path: Path = Path("gradle.properties")
    output_dir: Path = Path("build/publications")

    # Name of the channel flag; "true" selects JitPack
    channel_flag: str = "JITPACK"

    # Fallbacks when the properties file and environment are silent
    default_owner: str = "XichenX"
    default_version: str = "1.0.0"

    # Central registry endpoints
    release_url: str = SONATYPE_RELEASE_URL
    snapshot_url: str = SONATYPE_SNAPSHOT_URL
