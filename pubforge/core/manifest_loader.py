"""Release manifest loader: ``pubforge.toml``.

Example::

    [project]
    name_template = "Lumen {module}"
    description = "A Kotlin-first Android image loading library"

    [[modules]]
    name = "lumen-core"
    outputs = ["lumen-core/build/outputs/aar/lumen-core-release.aar"]

    [[modules]]
    name = "lumen"
    dependencies = ["lumen-core"]
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pubforge.core.errors import PublishError
from pubforge.models.manifest import ReleaseManifest

logger = logging.getLogger(__name__)


class ManifestError(PublishError):
    """Raised when the release manifest is missing, malformed or inconsistent."""


def validate_manifest(manifest: ReleaseManifest) -> list[str]:
    """Return consistency problems; an empty list means the manifest is usable."""
    problems: list[str] = []
    seen: set[str] = set()
    for module in manifest.modules:
        if module.name in seen:
            problems.append(f"duplicate module name {module.name!r}")
        seen.add(module.name)

    # Descriptors are named by artifact id, so two modules sharing one would
    # overwrite each other's publication even under different group ids.
    owners: dict[str, list[str]] = {}
    for module in manifest.modules:
        owners.setdefault(module.artifact_id or module.name, []).append(module.name)
    for artifact_id, names in owners.items():
        if len(set(names)) > 1:
            problems.append(
                f"artifact id {artifact_id!r} is produced by modules "
                + ", ".join(repr(n) for n in names)
            )

    for module in manifest.modules:
        for dep in module.dependencies:
            if dep == module.name:
                problems.append(f"module {module.name!r} depends on itself")
            elif dep not in seen:
                problems.append(f"module {module.name!r} depends on unknown module {dep!r}")
    return problems


def parse_manifest(data: dict[str, Any]) -> ReleaseManifest:
    try:
        manifest = ReleaseManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(f"Invalid release manifest: {exc}") from exc

    problems = validate_manifest(manifest)
    if problems:
        raise ManifestError(
            "Invalid release manifest:\n" + "\n".join(f"  - {p}" for p in problems)
        )
    return manifest


def load_manifest(path: Path) -> ReleaseManifest:
    path = Path(path)
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ManifestError(f"Release manifest not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"Release manifest {path} is not valid TOML: {exc}") from exc

    manifest = parse_manifest(data)
    logger.debug("Loaded %d modules from %s", len(manifest.modules), path)
    return manifest
