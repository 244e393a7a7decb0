"""Title and long description from docstring free text."""

from .base import AnnotationScopes


def resolve_description(scopes: AnnotationScopes) -> tuple[str, str]:
    """Return ``(title, description)`` for a route.

    Method-level free text replaces class-level free text outright; the
    two are never merged. The title is the first paragraph, the rest is
    the description, both verbatim.
    """
    text = scopes.method_scope.free_text or scopes.class_scope.free_text
    if not text:
        return "", ""

    lines = text.split("\n")
    title_lines: list[str] = []
    while lines and lines[0].strip():
        title_lines.append(lines.pop(0).strip())

    # drop the blank separator(s) between title and description
    while lines and not lines[0].strip():
        lines.pop(0)

    return " ".join(title_lines), "\n".join(lines)
