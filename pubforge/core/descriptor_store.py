"""Writes publication descriptors for the uploader to pick up.

Layout::

    {output_dir}/{artifactId}-{version}.publication.json
    {output_dir}/{artifactId}-{version}.publication.json.sig   (signed only)
    {output_dir}/release-report.json

Descriptors are written as pretty-printed JSON with sorted keys so that two
runs over the same inputs produce identical files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pubforge.models.publication import Publication
from pubforge.models.report import ReleaseReport

logger = logging.getLogger(__name__)

REPORT_FILENAME = "release-report.json"


def _dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True) + "\n"


def descriptor_filename(publication: Publication) -> str:
    identity = publication.identity
    return f"{identity.artifact_id}-{identity.version}.publication.json"


def signature_path(descriptor_path: Path) -> Path:
    return descriptor_path.with_name(descriptor_path.name + ".sig")


class DescriptorStore:
    """Directory of publication descriptors.

    Parameters
    ----------
    base_path:
        Output directory; created on first write.
    """

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base

    def write_publication(self, publication: Publication) -> Path:
        self._base.mkdir(parents=True, exist_ok=True)
        path = self._base / descriptor_filename(publication)
        path.write_text(_dump(publication.to_descriptor()), encoding="utf-8")
        sig_path = signature_path(path)
        if publication.signature is not None:
            sig_path.write_text(publication.signature.value + "\n", encoding="utf-8")
        elif sig_path.exists():
            # A signature from an earlier run no longer matches this descriptor
            sig_path.unlink()
            logger.info("Removed stale signature %s", sig_path)
        logger.debug("Wrote %s", path)
        return path

    def write_report(self, report: ReleaseReport) -> list[Path]:
        """Write every publication and the run summary; return the paths."""
        paths = [self.write_publication(p) for p in report.publications]
        summary = {
            "channel": report.context.channel.value,
            "groupId": report.context.group_id,
            "version": report.context.version,
            "publications": [
                {
                    "module": p.module,
                    "coordinates": p.identity.coordinates,
                    "descriptor": descriptor_filename(p),
                    "signingState": p.signing_state.value,
                    "repositories": [t.url for t in p.repositories],
                }
                for p in report.publications
            ],
            "warnings": [w.model_dump(mode="json") for w in report.warnings],
        }
        report_path = self._base / REPORT_FILENAME
        self._base.mkdir(parents=True, exist_ok=True)
        report_path.write_text(_dump(summary), encoding="utf-8")
        paths.append(report_path)
        return paths

    def read_descriptor(self, publication: Publication) -> dict[str, Any]:
        path = self._base / descriptor_filename(publication)
        return json.loads(path.read_text(encoding="utf-8"))
