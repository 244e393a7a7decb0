"""Route documentation generator. Builds one DocumentationRecord per route."""

import hashlib
import logging
from collections.abc import Callable, Iterable
from typing import Any

from api_doc_generator.errors import RouteProcessingError
from api_doc_generator.generator.response import ResponseMaterializer
from api_doc_generator.parser.base import DocumentationRecord, Route
from api_doc_generator.parser.description import resolve_description
from api_doc_generator.parser.params import parse_parameters
from api_doc_generator.parser.tags import parse_annotations
from api_doc_generator.resolver.auth import resolve_authenticated
from api_doc_generator.resolver.container import Container, DependencyResolver
from api_doc_generator.resolver.group import resolve_group
from api_doc_generator.resolver.introspect import DocstringIntrospector, SourceIntrospector, read_scopes
from api_doc_generator.resolver.invoker import DirectInvoker, Invoker
from api_doc_generator.settings import GeneratorSettings

logger = logging.getLogger(__name__)

HIDE_TAG = "hideFromAPIDocumentation"


class RouteDocGenerator:
    """Extracts documentation records from routes.

    Collaborators are injectable: ``resolver`` supplies controller and
    handler dependencies, ``introspector`` supplies docstrings and
    ``invoker`` calls handlers. ``factories`` maps model classes to
    callables producing the instance handed to transformers.
    """

    def __init__(
        self,
        settings: GeneratorSettings | None = None,
        resolver: DependencyResolver | None = None,
        introspector: SourceIntrospector | None = None,
        invoker: Invoker | None = None,
        factories: dict[type, Callable[[], Any]] | None = None,
    ):
        self.settings = settings or GeneratorSettings()
        self.resolver = resolver or Container()
        self.introspector = introspector or DocstringIntrospector()
        self.responses = ResponseMaterializer(
            self.resolver,
            invoker or DirectInvoker(),
            self.settings,
            factories,
        )

    def process_route(self, route: Route) -> DocumentationRecord:
        """Build the documentation record for one route.

        Raises RouteProcessingError when anything other than a recoverable
        parameter or handler failure goes wrong.
        """
        try:
            return self._build_record(route)
        except RouteProcessingError:
            raise
        except Exception as e:
            raise RouteProcessingError(route, e) from e

    def process_routes(self, routes: Iterable[Route]) -> tuple[list[DocumentationRecord], list[RouteProcessingError]]:
        """Process a batch. A failing route is reported, the others still get records."""
        records: list[DocumentationRecord] = []
        failures: list[RouteProcessingError] = []
        for route in routes:
            try:
                if self._hidden(route):
                    logger.debug(f"Skipping hidden route {route.path}")
                    continue
                records.append(self.process_route(route))
            except RouteProcessingError as e:
                logger.error(str(e))
                failures.append(e)
        return records, failures

    def is_hidden(self, route: Route) -> bool:
        block = parse_annotations(self.introspector.comment_of(route.handler.declaration))
        return block.has(HIDE_TAG)

    def _hidden(self, route: Route) -> bool:
        try:
            return self.is_hidden(route)
        except Exception as e:
            raise RouteProcessingError(route, e) from e

    def _build_record(self, route: Route) -> DocumentationRecord:
        scopes = read_scopes(route.handler, self.introspector)
        title, description = resolve_description(scopes)
        showresponse, response = self.responses.materialize(route, scopes)

        return DocumentationRecord(
            id=route_id(route),
            uri=route.path,
            title=title,
            description=description,
            group=resolve_group(scopes, self.settings.default_group),
            authenticated=resolve_authenticated(scopes),
            methods=[m for m in route.methods if m not in self.settings.excluded_methods],
            parameters=parse_parameters(scopes.method_scope),
            showresponse=showresponse,
            response=response,
        )


def route_id(route: Route) -> str:
    """Stable identifier for a route: md5 of its methods and path."""
    key = f"{','.join(route.methods)}|{route.path}"
    return hashlib.md5(key.encode("utf-8")).hexdigest()
