"""Layered lookup of configuration and secret values.

A resolver is an ordered chain of lookup providers; the first provider that
returns a non-blank value wins.  The standard chain is:

1. module-declared properties (when resolving for one module),
2. project properties (``gradle.properties``),
3. process environment variables.

Providers read from snapshots taken at construction time, so resolving the
same key twice always yields the same answer and has no side effects.
Absence (``None``) is an expected outcome, never an error.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from types import MappingProxyType

from pubforge.models.credentials import RepositoryCredentials, SigningCredentials

LookupProvider = Callable[[str], "str | None"]

# Keys shared by the properties file and the environment
VERSION_KEY = "VERSION_NAME"
OWNER_KEY = "GITHUB_USER"
SONATYPE_USERNAME_KEY = "SONATYPE_USERNAME"
SONATYPE_PASSWORD_KEY = "SONATYPE_PASSWORD"
SIGNING_KEY_ID_KEY = "SIGNING_KEY_ID"
SIGNING_PASSWORD_KEY = "SIGNING_PASSWORD"
SIGNING_KEY_FILE_KEY = "SIGNING_SECRET_KEY_RING_FILE"

REPOSITORY_CREDENTIAL_KEYS = (SONATYPE_USERNAME_KEY, SONATYPE_PASSWORD_KEY)
SIGNING_CREDENTIAL_KEYS = (SIGNING_KEY_ID_KEY, SIGNING_PASSWORD_KEY, SIGNING_KEY_FILE_KEY)


def mapping_provider(values: Mapping[str, str]) -> LookupProvider:
    """Provider backed by a frozen copy of *values*."""
    snapshot = MappingProxyType(dict(values))
    return snapshot.get


def environment_provider(environ: Mapping[str, str] | None = None) -> LookupProvider:
    """Provider backed by a snapshot of the process environment."""
    return mapping_provider(os.environ if environ is None else environ)


class CredentialResolver:
    """Ordered chain of lookup providers.

    Parameters
    ----------
    providers:
        Lookup functions tried in order.  Each returns the value for a key
        or ``None``.
    """

    def __init__(self, providers: list[LookupProvider]) -> None:
        self._providers: tuple[LookupProvider, ...] = tuple(providers)

    @classmethod
    def from_sources(
        cls,
        properties: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> CredentialResolver:
        """Standard chain: declared properties, then the environment."""
        return cls([
            mapping_provider(properties or {}),
            environment_provider(environ),
        ])

    def for_module(self, module_properties: Mapping[str, str]) -> CredentialResolver:
        """A resolver that consults *module_properties* before this chain."""
        if not module_properties:
            return self
        return CredentialResolver([mapping_provider(module_properties), *self._providers])

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, key: str) -> str | None:
        """Return the first non-blank value for *key*, or ``None``."""
        for provider in self._providers:
            value = provider(key)
            if value is not None and value.strip():
                return value
        return None

    def resolve_or(self, key: str, default: str) -> str:
        value = self.resolve(key)
        return default if value is None else value

    def repository_credentials(self) -> RepositoryCredentials:
        return RepositoryCredentials(
            username=self.resolve(SONATYPE_USERNAME_KEY),
            password=self.resolve(SONATYPE_PASSWORD_KEY),
        )

    def signing_credentials(self) -> SigningCredentials:
        return SigningCredentials(
            key_id=self.resolve(SIGNING_KEY_ID_KEY),
            password=self.resolve(SIGNING_PASSWORD_KEY),
            key_file=self.resolve(SIGNING_KEY_FILE_KEY),
        )
