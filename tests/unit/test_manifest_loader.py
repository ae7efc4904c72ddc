"""Tests for the release manifest loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from pubforge.core.manifest_loader import ManifestError, load_manifest, parse_manifest

LUMEN_TOML = """
[project]
name_template = "Lumen {module}"
description = "A Kotlin-first Android image loading library"

[[project.developers]]
id = "XichenX"
name = "Lumen Team"
email = "team@example.com"

[[modules]]
name = "lumen-core"
outputs = ["lumen-core/build/outputs/aar/lumen-core-release.aar"]

[[modules]]
name = "lumen-view"
outputs = ["lumen-view/build/outputs/aar/lumen-view-release.aar"]
with_javadoc = false

[modules.properties]
SONATYPE_USERNAME = "view-bot"

[[modules]]
name = "lumen"
dependencies = ["lumen-core", "lumen-view"]
"""


class TestLoadManifest:
    """Reading pubforge.toml from disk."""

    def test_load_lumen_manifest(self, tmp_path: Path):
        """Project metadata, module options and module properties all load."""
        path = tmp_path / "pubforge.toml"
        path.write_text(LUMEN_TOML, encoding="utf-8")

        manifest = load_manifest(path)

        assert manifest.module_names == ["lumen-core", "lumen-view", "lumen"]
        assert manifest.project.developers[0].email == "team@example.com"
        assert manifest.module("lumen").is_facade is True
        view = manifest.module("lumen-view")
        assert view.with_javadoc is False
        assert view.properties == {"SONATYPE_USERNAME": "view-bot"}

    def test_missing_file(self, tmp_path: Path):
        """A missing manifest is a ManifestError, not a bare OSError."""
        with pytest.raises(ManifestError, match="not found"):
            load_manifest(tmp_path / "pubforge.toml")

    def test_invalid_toml(self, tmp_path: Path):
        """TOML syntax errors are wrapped in ManifestError."""
        path = tmp_path / "pubforge.toml"
        path.write_text("[[modules]\nname = ", encoding="utf-8")
        with pytest.raises(ManifestError, match="not valid TOML"):
            load_manifest(path)


class TestValidation:
    """Consistency checks across modules."""

    def test_unknown_dependency(self):
        """A facade may only depend on declared modules."""
        data = {"modules": [{"name": "lumen", "dependencies": ["ghost"]}]}
        with pytest.raises(ManifestError, match="unknown module 'ghost'"):
            parse_manifest(data)

    def test_duplicate_names(self):
        """Module names are unique."""
        data = {"modules": [{"name": "a"}, {"name": "a"}]}
        with pytest.raises(ManifestError, match="duplicate"):
            parse_manifest(data)

    def test_artifact_id_override_colliding_with_module_name(self):
        """An override that reuses another module's artifact id is rejected."""
        data = {
            "modules": [
                {"name": "a", "artifact_id": "lumen-core"},
                {"name": "lumen-core"},
            ]
        }
        with pytest.raises(ManifestError, match="artifact id 'lumen-core'.*'a', 'lumen-core'"):
            parse_manifest(data)

    def test_artifact_id_collision_across_group_ids(self):
        """Different group ids do not help: descriptor files would still clash."""
        data = {
            "modules": [
                {"name": "a", "group_id": "org.one", "artifact_id": "shared"},
                {"name": "b", "group_id": "org.two", "artifact_id": "shared"},
            ]
        }
        with pytest.raises(ManifestError, match="artifact id 'shared'"):
            parse_manifest(data)

    def test_distinct_overrides_are_fine(self):
        """Renamed artifacts that stay unique pass validation."""
        data = {"modules": [{"name": "a", "artifact_id": "lumen-a"}, {"name": "b"}]}
        assert parse_manifest(data).module_names == ["a", "b"]

    def test_self_dependency(self):
        """A module cannot list itself as a dependency."""
        data = {"modules": [{"name": "a", "dependencies": ["a"]}]}
        with pytest.raises(ManifestError, match="depends on itself"):
            parse_manifest(data)

    def test_schema_error(self):
        """Schema violations are reported as ManifestError."""
        with pytest.raises(ManifestError, match="Invalid release manifest"):
            parse_manifest({"modules": [{"outputs": []}]})

    def test_dependency_declared_later_is_fine(self):
        """Dependencies may refer to modules declared further down."""
        data = {
            "modules": [
                {"name": "lumen", "dependencies": ["lumen-core"]},
                {"name": "lumen-core"},
            ]
        }
        assert parse_manifest(data).module_names == ["lumen", "lumen-core"]
