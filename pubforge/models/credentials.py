"""Credential sets resolved from properties and environment.

A set is *complete* only when every field resolved to a non-blank value.
Partial sets are legitimate states and are handed to their consumers as-is.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def describe_secret(value: str | None) -> str:
    """Diagnostic form of a secret: never the value, only whether it is set."""
    if _is_blank(value):
        return "not set"
    return f"set ({len(value)} chars)"


def mask_username(username: str) -> str:
    """First three characters of *username* followed by ``***``."""
    return f"{username[:3]}***"


class RepositoryCredentials(BaseModel):
    """Username / password pair for a Maven repository."""

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    password: str | None = None

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def missing_fields(self) -> list[str]:
        return [
            name
            for name, value in (("username", self.username), ("password", self.password))
            if _is_blank(value)
        ]


class SigningCredentials(BaseModel):
    """Key id, key password and the path to the secret key file."""

    model_config = ConfigDict(frozen=True)

    key_id: str | None = None
    password: str | None = None
    key_file: str | None = None

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    @property
    def key_path(self) -> Path | None:
        if _is_blank(self.key_file):
            return None
        return Path(self.key_file.strip())

    def missing_fields(self) -> list[str]:
        return [
            name
            for name, value in (
                ("key_id", self.key_id),
                ("password", self.password),
                ("key_file", self.key_file),
            )
            if _is_blank(value)
        ]
