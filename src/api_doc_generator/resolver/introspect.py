"""Docstring lookup and class-name resolution for handlers."""

import importlib
import inspect
import sys
from typing import Any, Protocol

from api_doc_generator.errors import AnnotationError
from api_doc_generator.parser.base import AnnotationScopes, HandlerReference
from api_doc_generator.parser.tags import parse_annotations


class SourceIntrospector(Protocol):
    def comment_of(self, site: Any) -> str:
        """Raw documentation comment of a class or function, or ''."""
        ...


class DocstringIntrospector:
    """Reads a declaration's own docstring. Docstrings are not inherited."""

    def comment_of(self, site: Any) -> str:
        doc = getattr(site, "__doc__", None)
        if not isinstance(doc, str):
            return ""
        return inspect.cleandoc(doc)


def read_scopes(handler: HandlerReference, introspector: SourceIntrospector) -> AnnotationScopes:
    """Parse the class-level and method-level blocks for a handler."""
    class_text = introspector.comment_of(handler.controller) if handler.controller is not None else ""
    method_text = introspector.comment_of(handler.declaration)
    return AnnotationScopes(
        class_scope=parse_annotations(class_text),
        method_scope=parse_annotations(method_text),
    )


def resolve_class(name: str, module_name: str) -> type:
    """Locate a class named in a tag.

    Bare names are looked up in the handler's module first. Otherwise the
    name is imported as ``module:Class`` or ``package.module.Class``.
    """
    name = name.strip()
    if not name:
        raise AnnotationError("empty class reference")

    module = sys.modules.get(module_name)
    if module is not None and hasattr(module, name):
        return _expect_class(getattr(module, name), name)

    if ":" in name:
        target_module, _, attr = name.partition(":")
    else:
        target_module, _, attr = name.rpartition(".")
    if not target_module:
        raise AnnotationError(f"cannot find class {name!r} from module {module_name!r}")

    try:
        module = importlib.import_module(target_module)
        obj = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise AnnotationError(f"cannot import class {name!r}: {e}") from e
    return _expect_class(obj, name)


def _expect_class(obj: Any, name: str) -> type:
    if not isinstance(obj, type):
        raise AnnotationError(f"{name!r} does not name a class")
    return obj
