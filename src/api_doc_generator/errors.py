"""Exception hierarchy for api-doc-generator.

Recoverable errors (malformed parameter tags, failed handler calls,
unresolved handler dependencies) are caught and logged by the component
that raises them. Anything else surfaces as RouteProcessingError.
"""


class ApiDocError(Exception):
    """Base exception for all api-doc-generator errors."""


class MalformedParameterTag(ApiDocError):
    """Raised when a parameter tag body cannot be parsed."""


class UnresolvedDependency(ApiDocError):
    """Raised when a handler parameter has no resolvable value."""


class HandlerInvocationFailure(ApiDocError):
    """Raised when calling a route handler for a sample response fails."""


class AnnotationError(ApiDocError):
    """Raised when a tag references a class that cannot be located."""


class RouteProcessingError(ApiDocError):
    """Raised when a route's documentation record cannot be built."""

    def __init__(self, route, cause: BaseException):
        self.route = route
        self.cause = cause
        methods = "|".join(route.methods)
        super().__init__(f"Failed to process route [{methods}] {route.path}: {cause}")
