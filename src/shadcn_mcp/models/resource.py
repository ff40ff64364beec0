from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PackageManager = Literal["npm", "pnpm", "yarn", "bun"]
PACKAGE_MANAGERS: tuple[PackageManager, ...] = ("npm", "pnpm", "yarn", "bun")


class ResourceKind(StrEnum):
    COMPONENT = "component"
    BLOCK = "block"


class CommandSet(BaseModel):
    """One install invocation per supported package manager."""

    model_config = ConfigDict(frozen=True)

    npm: str
    pnpm: str
    yarn: str
    bun: str

    def for_runtime(self, runtime: PackageManager | None) -> str:
        return getattr(self, runtime or "npm")


class Resource(BaseModel):
    """Cached representation of a component or a block.

    ``doc`` keeps the raw extracted text verbatim; ``description``, ``links``,
    ``usage`` and ``examples`` are best-effort extracts from the same source
    and may be empty. Collections are tuples so a cached entry cannot be
    changed in place.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ResourceKind
    description: str | None = None
    doc: str | None = None
    commands: tuple[CommandSet, ...] | None = None  # zero or one entry
    links: tuple[str, ...] | None = None
    usage: str | None = None
    examples: tuple[str, ...] | None = None
    is_block: bool = Field(default=False, serialization_alias="isBlock")


class Block(BaseModel):
    """Transient scrape result for one block on a listing page."""

    name: str
    command: str
    doc: str
    description: str | None = None


class ParsedDocument(BaseModel):
    """Structured extract of a component document."""

    frontmatter: str = ""
    description: str = ""
    links: list[str] = []
    install_command: str | None = None
    usage: str = ""
    code_examples: list[str] = []
