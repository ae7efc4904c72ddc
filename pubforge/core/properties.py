"""Reader for ``gradle.properties``-style files.

Supports ``key=value`` and ``key: value`` lines, ``#`` / ``!`` comments and
blank lines.  Line continuations and unicode escapes are not supported; the
release properties never use them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

logger = logging.getLogger(__name__)


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties *text* into a dict.  Later keys override earlier ones."""
    props: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        positions = [p for p in (line.find("="), line.find(":")) if p != -1]
        if not positions:
            # A bare key declares an empty value
            props[line] = ""
            continue
        sep = min(positions)
        props[line[:sep].strip()] = line[sep + 1:].strip()
    return props


def load_properties(path: Path) -> Mapping[str, str]:
    """Load a properties file as a read-only mapping.

    A missing file yields an empty mapping: every value then falls back to
    the environment or its default.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("Properties file %s not found, using environment only.", path)
        return MappingProxyType({})
    props = parse_properties(path.read_text(encoding="utf-8"))
    logger.debug("Loaded %d properties from %s", len(props), path)
    return MappingProxyType(props)
