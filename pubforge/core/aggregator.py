"""Module aggregator: umbrella publication for a facade module.

The facade carries no archive of its own, only a POM whose dependencies are
the published identities of its member modules, so consumers of the facade
receive every member transitively.  Member publications are never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pubforge.core.channel_resolver import identity_for
from pubforge.core.publication_builder import PublicationBuilder
from pubforge.models.manifest import Module
from pubforge.models.publication import Dependency, Publication

logger = logging.getLogger(__name__)


class ModuleAggregator:
    """Builds facade publications on top of a :class:`PublicationBuilder`."""

    def __init__(self, builder: PublicationBuilder) -> None:
        self.builder = builder

    def aggregate(self, facade: Module, modules: Mapping[str, Module]) -> Publication:
        """Return the facade publication.

        Dependency identities are computed from the member modules and the
        run context, not from sibling publications, so the facade can be
        configured in any order relative to its members.
        """
        base = self.builder.build(facade)
        dependencies = [
            Dependency(identity=identity_for(modules[name], self.builder.context))
            for name in facade.dependencies
        ]
        publication = base.model_copy(
            update={"packaging": "pom", "artifacts": [], "dependencies": dependencies}
        )
        logger.debug(
            "Facade %s aggregates %s",
            publication.identity.coordinates,
            ", ".join(d.identity.artifact_id for d in dependencies),
        )
        return publication
