"""Release manifest models: project metadata template and modules.

Loaded from ``pubforge.toml`` by :mod:`pubforge.core.manifest_loader`.
Defaults describe the Lumen image loading library.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class License(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "The Apache License, Version 2.0"
    url: str = "http://www.apache.org/licenses/LICENSE-2.0.txt"


class Developer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = "XichenX"
    name: str = "Lumen Team"
    email: str = "3108531642@qq.com"


class Scm(BaseModel):
    """Source-control pointers for the POM ``<scm>`` block."""

    model_config = ConfigDict(frozen=True)

    connection: str = "scm:git:git://github.com/XichenX/Lumen.git"
    developer_connection: str = "scm:git:ssh://github.com:XichenX/Lumen.git"
    url: str = "https://github.com/XichenX/Lumen"


class MetadataBlock(BaseModel):
    """Descriptive POM metadata stamped on one publication."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    url: str
    licenses: list[License]
    developers: list[Developer]
    scm: Scm


class ProjectMetadata(BaseModel):
    """Metadata template shared by every module of the project.

    ``name_template`` is formatted with ``{module}`` set to the module name.
    """

    model_config = ConfigDict(frozen=True)

    name_template: str = "Lumen {module}"
    description: str = "A Kotlin-first Android image loading library"
    url: str = "https://github.com/XichenX/Lumen"
    licenses: list[License] = Field(default_factory=lambda: [License()])
    developers: list[Developer] = Field(default_factory=lambda: [Developer()])
    scm: Scm = Scm()

    def render(self, module_name: str) -> MetadataBlock:
        """Interpolate *module_name* into the template."""
        return MetadataBlock(
            name=self.name_template.format(module=module_name),
            description=self.description,
            url=self.url,
            licenses=list(self.licenses),
            developers=list(self.developers),
            scm=self.scm,
        )


class Module(BaseModel):
    """A unit of publishable output, as produced by the external build.

    ``outputs`` are opaque handles (usually paths to the built archives).
    ``dependencies`` is only meaningful for facade modules.
    ``publishing`` records whether the publishing subsystem was initialized
    for the module by the build; a module without it cannot be published.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    outputs: list[str] = []
    dependencies: list[str] = []
    group_id: str | None = None
    artifact_id: str | None = None
    publishing: bool = True
    with_sources: bool = True
    with_javadoc: bool = True
    extension: str = "aar"
    properties: dict[str, str] = {}

    @property
    def is_facade(self) -> bool:
        return bool(self.dependencies)


class ReleaseManifest(BaseModel):
    """All modules of one build invocation plus the shared metadata."""

    model_config = ConfigDict(frozen=True)

    project: ProjectMetadata = ProjectMetadata()
    modules: list[Module] = []

    def module(self, name: str) -> Module:
        for module in self.modules:
            if module.name == name:
                return module
        raise KeyError(name)

    @property
    def module_names(self) -> list[str]:
        return [m.name for m in self.modules]
