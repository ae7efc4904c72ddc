"""pubforge: release-publishing orchestrator for multi-module libraries.

Decides, per build invocation, which distribution channel to target, stamps
every module's publication with coordinates and POM metadata, routes it to the
right upload endpoint and signs it when the signing key is available.

  - Layered credential lookup (module properties > project properties > environment)
  - Peer distribution (JitPack) or central registry (Sonatype) per run
  - Release / snapshot endpoint selection by version suffix
  - Ed25519 signing via PyNaCl, skipped with a warning when not configured
  - Facade modules aggregating their members' coordinates
"""

__version__ = "0.1.0"
__description__ = "Channel-aware, signed release publishing for multi-module libraries"

from pubforge.core.orchestrator import ReleaseOrchestrator
from pubforge.cli.app import app

__all__ = ["ReleaseOrchestrator", "app", "__version__"]
