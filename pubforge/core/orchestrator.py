"""Release orchestrator: the central coordinator for a publishing run.

Wires the credential resolver, channel resolver, publication builder,
aggregator, repository selector and signing orchestrator into one pass over
the manifest's modules.

Each module is configured in two phases: every input (credentials for the
repository and for signing) is resolved first from immutable snapshots, then
the publication is built, targeted and signed.  Modules do not depend on each
other's results, so the order of the manifest does not matter.  The run stops
at the first :class:`~pubforge.core.errors.PublishError`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from pubforge.config import PublishSettings
from pubforge.core.aggregator import ModuleAggregator
from pubforge.core.channel_resolver import resolve_run_context
from pubforge.core.credential_resolver import CredentialResolver
from pubforge.core.manifest_loader import load_manifest
from pubforge.core.properties import load_properties
from pubforge.core.publication_builder import PublicationBuilder
from pubforge.core.repository_selector import RepositorySelector
from pubforge.core.signing import SigningOrchestrator
from pubforge.models.credentials import RepositoryCredentials, SigningCredentials
from pubforge.models.manifest import Module, ReleaseManifest
from pubforge.models.publication import Publication
from pubforge.models.report import ReleaseReport, RunWarning

logger = logging.getLogger(__name__)


class ModuleInputs(BaseModel):
    """Everything resolved for one module before anything is built."""

    model_config = ConfigDict(frozen=True)

    module: Module
    repository: RepositoryCredentials
    signing: SigningCredentials


class ReleaseOrchestrator:
    """Configures publications for every module of a release manifest.

    Parameters
    ----------
    manifest:
        Modules and shared project metadata.
    properties:
        Declared project properties (``gradle.properties``).
    environ:
        Process environment; snapshotted at construction.  Defaults to
        ``os.environ``.
    settings:
        Tool settings.  Uses defaults if not provided.
    base_dir:
        Directory that relative key file paths are resolved against.
    """

    def __init__(
        self,
        manifest: ReleaseManifest,
        *,
        properties: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
        settings: PublishSettings | None = None,
        base_dir: Path | None = None,
    ) -> None:
        self.manifest = manifest
        self.settings = settings or PublishSettings()
        self._environ = MappingProxyType(dict(os.environ if environ is None else environ))
        self._modules = {m.name: m for m in manifest.modules}

        self.resolver = CredentialResolver.from_sources(properties, self._environ)
        self.context, self._run_warnings = resolve_run_context(
            self.resolver, self._environ, self.settings
        )

        self.builder = PublicationBuilder(self.context, manifest.project)
        self.aggregator = ModuleAggregator(self.builder)
        self.selector = RepositorySelector(
            self.context.channel,
            release_url=self.settings.release_url,
            snapshot_url=self.settings.snapshot_url,
        )
        self.signer = SigningOrchestrator(self.context.channel, base_dir=base_dir)

    @classmethod
    def from_settings(
        cls,
        settings: PublishSettings | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> ReleaseOrchestrator:
        """Load the manifest and properties named by *settings*."""
        settings = settings or PublishSettings()
        manifest = load_manifest(settings.manifest_path)
        return cls(
            manifest,
            properties=load_properties(settings.properties_path),
            environ=environ,
            settings=settings,
            base_dir=settings.manifest_path.parent,
        )

    # ------------------------------------------------------------------
    # Per-module pass
    # ------------------------------------------------------------------

    def resolve_inputs(self, module: Module) -> ModuleInputs:
        """Phase 1: pure reads, nothing is built."""
        resolver = self.resolver.for_module(module.properties)
        return ModuleInputs(
            module=module,
            repository=resolver.repository_credentials(),
            signing=resolver.signing_credentials(),
        )

    def configure(self, inputs: ModuleInputs) -> tuple[Publication, list[RunWarning]]:
        """Phase 2: build, target and sign one publication."""
        module = inputs.module
        if module.is_facade:
            publication = self.aggregator.aggregate(module, self._modules)
        else:
            publication = self.builder.build(module)

        selection = self.selector.select(publication, inputs.repository)
        outcome = self.signer.sign(selection.publication, inputs.signing)
        return outcome.publication, [*selection.warnings, *outcome.warnings]

    def configure_module(self, module: Module) -> tuple[Publication, list[RunWarning]]:
        return self.configure(self.resolve_inputs(module))

    # ------------------------------------------------------------------
    # Whole run
    # ------------------------------------------------------------------

    def run(self) -> ReleaseReport:
        """Configure every module; raises on the first fatal error."""
        publications: list[Publication] = []
        warnings: list[RunWarning] = list(self._run_warnings)

        for module in self.manifest.modules:
            publication, module_warnings = self.configure_module(module)
            publications.append(publication)
            warnings.extend(module_warnings)

        logger.info(
            "Configured %d publications (%d signed, %d warnings)",
            len(publications),
            sum(1 for p in publications if p.signed),
            len(warnings),
        )
        return ReleaseReport(
            context=self.context, publications=publications, warnings=warnings
        )
