"""Install command derivation.

A canonical install command is npm-flavoured (``npx shadcn@latest add button``).
Every other package manager is derived by swapping the runner prefix token
and leaving the rest of the command untouched.
"""

from __future__ import annotations

import re

from shadcn_mcp.models.resource import CommandSet, PackageManager

CANONICAL_RUNNER = "npx"

RUNNER_PREFIXES: dict[PackageManager, str] = {
    "npm": "npx",
    "pnpm": "pnpm dlx",
    "yarn": "yarn dlx",
    "bun": "bunx",
}

# Whole token only: "npx" inside a package name or flag is not a runner.
_RUNNER_RE = re.compile(rf"(?<!\S){re.escape(CANONICAL_RUNNER)}(?!\S)")


def has_runner_prefix(command: str) -> bool:
    return _RUNNER_RE.search(command) is not None


def derive(command: str, runtime: PackageManager) -> str:
    """Return ``command`` rewritten for ``runtime``.

    Only the first occurrence of the runner token is replaced. Raises
    ``ValueError`` when the command carries no runner token at all.
    """
    if not has_runner_prefix(command):
        raise ValueError(f"Command has no '{CANONICAL_RUNNER}' runner prefix: {command!r}")
    if runtime == "npm":
        return command
    return _RUNNER_RE.sub(RUNNER_PREFIXES[runtime], command, count=1)


def build_command_set(command: str) -> CommandSet:
    """Derive the full per-runtime command set from one canonical command."""
    return CommandSet(
        npm=derive(command, "npm"),
        pnpm=derive(command, "pnpm"),
        yarn=derive(command, "yarn"),
        bun=derive(command, "bun"),
    )
