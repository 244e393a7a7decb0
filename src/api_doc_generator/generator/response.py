"""Sample response capture for a route.

Strategies, first match wins:

1. ``@response <json>``: the literal body.
2. ``@transformer`` / ``@transformerCollection`` (with optional
   ``@transformerModel``): a representative model run through the
   transformer. The route handler is never called.
3. Calling the route handler with resolved dependencies and serializing
   whatever it returns. Failures here are logged and leave the route
   without a sample response.
"""

import dataclasses
import datetime
import json
import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from api_doc_generator.errors import AnnotationError, HandlerInvocationFailure, UnresolvedDependency
from api_doc_generator.generator.sample import build_instance, empty_value
from api_doc_generator.generator.transformer import Collection, Item, model_type_of, serialize
from api_doc_generator.parser.base import AnnotationBlock, AnnotationScopes, Route
from api_doc_generator.resolver.container import NOT_RESOLVABLE, DependencyResolver, parameters_of
from api_doc_generator.resolver.introspect import resolve_class
from api_doc_generator.resolver.invoker import Invoker
from api_doc_generator.settings import GeneratorSettings

logger = logging.getLogger(__name__)

RESPONSE_TAG = "response"
TRANSFORMER_TAG = "transformer"
TRANSFORMER_COLLECTION_TAG = "transformerCollection"
TRANSFORMER_MODEL_TAG = "transformerModel"

NO_RESPONSE: tuple[bool, str | None] = (False, None)


class ResponseMaterializer:
    """Produces ``(showresponse, response)`` for a route."""

    def __init__(
        self,
        resolver: DependencyResolver,
        invoker: Invoker,
        settings: GeneratorSettings,
        factories: dict[type, Callable[[], Any]] | None = None,
    ):
        self.resolver = resolver
        self.invoker = invoker
        self.settings = settings
        self.factories = factories or {}

    def materialize(self, route: Route, scopes: AnnotationScopes) -> tuple[bool, str | None]:
        # the method block is checked for every tag strategy before the class block
        for block in (scopes.method_scope, scopes.class_scope):
            literal = block.get(RESPONSE_TAG)
            if literal:
                logger.debug(f"{route.path}: using @response tag")
                return True, literal_response(literal)

            transformer = _transformer_tag(block)
            if transformer is not None:
                name, collection = transformer
                logger.debug(f"{route.path}: using transformer {name}")
                model_name = scopes.lookup(TRANSFORMER_MODEL_TAG)
                return True, self._transform(route, name, model_name, collection)

        if not self.settings.response_calls:
            return NO_RESPONSE
        return self._call_handler(route)

    def _transform(self, route: Route, transformer_name: str, model_name: str | None, collection: bool) -> str:
        module = route.handler.module
        transformer_cls = resolve_class(transformer_name, module)
        if not callable(getattr(transformer_cls, "transform", None)):
            raise AnnotationError(f"{transformer_cls.__name__} has no transform() method")

        model_cls = resolve_class(model_name, module) if model_name else model_type_of(transformer_cls)
        model = build_instance(model_cls, self.factories)

        transformer = self.resolver.resolve(transformer_cls)
        if transformer is NOT_RESOLVABLE:
            transformer = transformer_cls()

        if collection:
            resource = Collection([model] * self.settings.collection_size, transformer)
        else:
            resource = Item(model, transformer)
        return encode_json(serialize(resource))

    def _call_handler(self, route: Route) -> tuple[bool, str | None]:
        try:
            content = self._capture(route)
        except HandlerInvocationFailure as e:
            logger.warning(f"No sample response for {route.path}: {e}")
            return NO_RESPONSE

        if not content:
            return NO_RESPONSE
        return True, content

    def _capture(self, route: Route) -> str | None:
        try:
            return response_content(self._invoke(route))
        except Exception as e:
            raise HandlerInvocationFailure(f"{route.handler.label} raised {type(e).__name__}: {e}") from e

    def _invoke(self, route: Route) -> Any:
        handler = route.handler
        if handler.func is not None:
            target = handler.func
        else:
            controller = self.resolver.resolve(handler.controller)
            if controller is NOT_RESOLVABLE:
                controller = handler.controller(**self._arguments(handler.controller))
            target = getattr(controller, handler.method)
        return self.invoker.call(target, self._arguments(target))

    def _arguments(self, func: Callable) -> dict[str, Any]:
        arguments = {}
        for name, param, annotation in parameters_of(func):
            try:
                arguments[name] = self._resolve_argument(name, annotation)
            except UnresolvedDependency as e:
                logger.debug(str(e))
                if param.default is param.empty:
                    arguments[name] = empty_value(annotation)
        return arguments

    def _resolve_argument(self, name: str, annotation: Any) -> Any:
        value = NOT_RESOLVABLE if annotation is None else self.resolver.resolve(annotation)
        if value is NOT_RESOLVABLE:
            raise UnresolvedDependency(f"Nothing resolves parameter {name!r} ({annotation!r})")
        return value


def literal_response(body: str) -> str:
    """Compact the body when it is JSON; otherwise pass it through."""
    try:
        return encode_json(json.loads(body))
    except ValueError:
        return body


def response_content(value: Any) -> str | None:
    """Serialize a handler's return value to a JSON string."""
    if value is None:
        return None
    if callable(getattr(value, "get_content", None)):
        value = value.get_content()
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    if isinstance(value, str):
        if not value:
            return None
        try:
            json.loads(value)
        except ValueError:
            return encode_json(value)
        return value
    return encode_json(value)


def encode_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_to_jsonable)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _transformer_tag(block: AnnotationBlock) -> tuple[str, bool] | None:
    body = block.get(TRANSFORMER_COLLECTION_TAG)
    if body:
        return body, True
    body = block.get(TRANSFORMER_TAG)
    if body:
        return body, False
    return None
