"""Docstring annotation parser.

Splits a cleaned docstring into ``@tag body`` lines and free text. Tags
never continue onto the next line.
"""

import re

from .base import AnnotationBlock

TAG_LINE = re.compile(r"^@([A-Za-z_][\w-]*)(?:\s+(.*))?$")


def parse_annotations(text: str | None) -> AnnotationBlock:
    """Parse a docstring into an AnnotationBlock. Empty input gives an empty block."""
    if not text or not text.strip():
        return AnnotationBlock()

    tags: dict[str, str] = {}
    occurrences: list[tuple[str, str]] = []
    free_lines: list[str] = []

    for line in text.splitlines():
        match = TAG_LINE.match(line.strip())
        if match is None:
            free_lines.append(line.rstrip())
            continue

        name = match.group(1).lower()
        body = (match.group(2) or "").strip()
        tags[name] = body
        occurrences.append((name, body))

    return AnnotationBlock(
        tags=tags,
        occurrences=occurrences,
        free_text=_trim_blank_edges(free_lines),
    )


def _trim_blank_edges(lines: list[str]) -> str:
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)
