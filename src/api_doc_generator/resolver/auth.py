"""Authentication flag resolution."""

from api_doc_generator.parser.base import AnnotationScopes

AUTH_TAG = "authenticated"


def resolve_authenticated(scopes: AnnotationScopes) -> bool:
    """True when @authenticated appears at method or class level. Its body is ignored."""
    return scopes.method_scope.has(AUTH_TAG) or scopes.class_scope.has(AUTH_TAG)
