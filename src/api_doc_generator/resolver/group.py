"""Route group resolution."""

from api_doc_generator.parser.base import AnnotationScopes
from api_doc_generator.settings import DEFAULT_GROUP

GROUP_TAG = "group"


def resolve_group(scopes: AnnotationScopes, default: str = DEFAULT_GROUP) -> str:
    """A non-empty method @group wins, then the class @group, then ``default``."""
    for block in (scopes.method_scope, scopes.class_scope):
        group = block.get(GROUP_TAG)
        if group:
            return group
    return default
