"""Publication builder: one base publication per module.

The builder runs after the module's build outputs are finalized.  It checks
that the publishing subsystem was initialized for the module and fails hard
if not: a module without it has no valid partial publication.
"""

from __future__ import annotations

import logging

from pubforge.core.channel_resolver import identity_for
from pubforge.core.errors import PublishError
from pubforge.models.channel import RunContext
from pubforge.models.manifest import Module, ProjectMetadata
from pubforge.models.publication import Artifact, Publication

logger = logging.getLogger(__name__)


class PublishingUnavailableError(PublishError):
    """Raised when a module reaches publication without a publishing subsystem.

    Must not be caught and ignored; the run stops with a non-zero exit.
    """

    def __init__(self, module: str) -> None:
        self.module = module
        super().__init__(
            f"Publishing subsystem not found for {module}. "
            "This usually means the publishing plugin was not applied or not "
            "initialized for the module. Please check your build configuration."
        )


def module_artifacts(module: Module) -> list[Artifact]:
    """Main archive plus the ``sources`` / ``javadoc`` jars of the variant."""
    artifacts: list[Artifact] = []
    for output in module.outputs:
        artifacts.append(Artifact(file=output, extension=module.extension))
    if module.outputs:
        stem = module.artifact_id or module.name
        if module.with_sources:
            artifacts.append(
                Artifact(file=f"{stem}-sources.jar", extension="jar", classifier="sources")
            )
        if module.with_javadoc:
            artifacts.append(
                Artifact(file=f"{stem}-javadoc.jar", extension="jar", classifier="javadoc")
            )
    return artifacts


class PublicationBuilder:
    """Builds the base :class:`Publication` for a module.

    Parameters
    ----------
    context:
        The run's frozen channel / owner / version.
    metadata:
        Project-wide metadata template.
    """

    def __init__(self, context: RunContext, metadata: ProjectMetadata | None = None) -> None:
        self.context = context
        self.metadata = metadata or ProjectMetadata()

    def check_publishing(self, module: Module) -> None:
        if not module.publishing:
            logger.error("Publishing subsystem not found for %s", module.name)
            raise PublishingUnavailableError(module.name)

    def build(self, module: Module) -> Publication:
        """Return a publication with metadata and artifacts, no targets, unsigned."""
        self.check_publishing(module)
        publication = Publication(
            module=module.name,
            identity=identity_for(module, self.context),
            packaging=module.extension,
            artifacts=module_artifacts(module),
            metadata=self.metadata.render(module.name),
        )
        logger.debug("Built publication %s", publication.identity.coordinates)
        return publication
