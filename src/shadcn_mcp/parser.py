"""Component document parser.

Component docs are MDX: a ``---`` delimited frontmatter header followed by
prose and fenced code blocks. Every extraction step tolerates absence; a
missing field becomes an empty value, never an error. The raw text is kept
verbatim as the resource ``doc`` regardless of what the extractors find.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from shadcn_mcp.commands import build_command_set, has_runner_prefix
from shadcn_mcp.models.resource import ParsedDocument, Resource, ResourceKind

log = structlog.get_logger()


@dataclass(frozen=True)
class ExtractionRule:
    """A named pattern whose first capture group is the extracted value."""

    name: str
    pattern: re.Pattern[str]

    def apply(self, text: str) -> str | None:
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.group(1).strip()


# Evaluated top to bottom; the first rule that matches wins even when a later
# rule would match differently.
DESCRIPTION_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("quoted", re.compile(r"""description:\s*["']([^"']+)["']""")),
    ExtractionRule("unquoted", re.compile(r"description:\s*([^\n]+)")),
    ExtractionRule("spaced_colon_quoted", re.compile(r"""description\s*:\s*["']([^"']+)["']""")),
)

# doc first, then api
LINK_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("doc", re.compile(r"doc:\s*([^\n]+)")),
    ExtractionRule("api", re.compile(r"api:\s*([^\n]+)")),
)

_FRONTMATTER_RE = re.compile(r"\A---\n(.*?)\n---(?:\n|\Z)", re.DOTALL)
_LINKS_BLOCK_RE = re.compile(r"links:\n(.*?)(?=\n\w|\Z)", re.DOTALL)
_INSTALL_COMMAND_RE = re.compile(r"```(?:bash|sh|shell)?\n(npx shadcn(?:@\S+)? add [^\n]+)\n```")
_USAGE_RE = re.compile(r"^## Usage\n\n(.*?)(?=\n## |\Z)", re.DOTALL | re.MULTILINE)
_CODE_BLOCK_RE = re.compile(r"```(?:tsx|ts|jsx|js)\b[^\n]*\n(.*?)```", re.DOTALL)


def _normalise(text: str) -> str:
    return text.replace("\r\n", "\n")


def extract_frontmatter(text: str) -> str:
    """Return the header between the opening and closing ``---`` lines."""
    match = _FRONTMATTER_RE.match(text)
    return match.group(1) if match else ""


def _body_after_frontmatter(text: str) -> str | None:
    match = _FRONTMATTER_RE.match(text)
    return text[match.end() :] if match else None


def extract_description(frontmatter: str, text: str) -> str:
    """Apply DESCRIPTION_RULES in order, then fall back to the first body line.

    The fallback only applies when the document has a frontmatter block; it
    takes the first non-blank line after the closing ``---``.
    """
    for rule in DESCRIPTION_RULES:
        value = rule.apply(frontmatter)
        if value is not None:
            return value

    body = _body_after_frontmatter(text)
    if body is None:
        return ""
    for line in body.splitlines():
        if line.strip():
            return line.strip()
    return ""


def extract_links(frontmatter: str) -> list[str]:
    """Collect the ``doc`` and ``api`` entries nested under ``links:``."""
    block = _LINKS_BLOCK_RE.search(frontmatter)
    if block is None:
        return []

    links: list[str] = []
    for rule in LINK_RULES:
        value = rule.apply(block.group(1))
        if value:
            links.append(value)
    return links


def extract_install_command(text: str) -> str | None:
    """Return the fenced ``npx shadcn add`` command without its fence."""
    match = _INSTALL_COMMAND_RE.search(text)
    return match.group(1).strip() if match else None


def extract_usage(text: str) -> str:
    match = _USAGE_RE.search(text)
    return match.group(1).strip() if match else ""


def extract_code_examples(text: str) -> list[str]:
    return [block.strip() for block in _CODE_BLOCK_RE.findall(text) if block.strip()]


def parse_document(text: str) -> ParsedDocument:
    """Run every extractor over ``text``."""
    text = _normalise(text)
    frontmatter = extract_frontmatter(text)
    return ParsedDocument(
        frontmatter=frontmatter,
        description=extract_description(frontmatter, text),
        links=extract_links(frontmatter),
        install_command=extract_install_command(text),
        usage=extract_usage(text),
        code_examples=extract_code_examples(text),
    )


def build_component_resource(name: str, text: str) -> Resource:
    """Parse a component document into a cacheable Resource."""
    parsed = parse_document(text)

    commands = None
    if parsed.install_command and has_runner_prefix(parsed.install_command):
        commands = (build_command_set(parsed.install_command),)
    else:
        log.debug("install_command_not_found", component=name)

    return Resource(
        name=name,
        kind=ResourceKind.COMPONENT,
        description=parsed.description,
        doc=text,
        commands=commands,
        links=tuple(parsed.links) or None,
        usage=parsed.usage or None,
        examples=tuple(parsed.code_examples) or None,
        is_block=False,
    )
