"""Deterministic sample values.

Used for parameter examples that the docstring leaves out, for the
representative model handed to a transformer, and for handler arguments
nothing could resolve. Every value derives from a fixed seed, so repeated
runs produce identical documentation.
"""

import dataclasses
import random
import typing
from collections.abc import Callable
from types import NoneType, SimpleNamespace, UnionType
from typing import Any

from pydantic import BaseModel

WORDS = ("apple", "banana", "cherry", "delta", "echo", "falcon", "garden", "harbor")

_PYTHON_TYPES = {int: "integer", float: "number", bool: "boolean", str: "string", dict: "object", list: "array"}

_EMPTY = {int: 0, float: 0.0, bool: False, str: "", dict: dict, list: list}


def example_for(param_type: str, seed: str) -> Any:
    """Fabricate an example value of the given parameter type."""
    rng = random.Random(seed)
    if param_type == "integer":
        return rng.randint(1, 100)
    if param_type == "number":
        return round(rng.uniform(1, 100), 2)
    if param_type == "boolean":
        return rng.random() < 0.5
    if param_type == "string":
        return rng.choice(WORDS)
    if param_type == "object":
        return {}
    if param_type == "array":
        return []
    raise ValueError(f"Unknown parameter type: {param_type}")


def sample_for_annotation(annotation: Any, seed: str) -> Any:
    """Sample value for a Python type annotation, or None when unknown."""
    annotation = _unwrap_optional(annotation)
    param_type = _PYTHON_TYPES.get(typing.get_origin(annotation) or annotation)
    if param_type is None:
        return None
    return example_for(param_type, seed)


def empty_value(annotation: Any) -> Any:
    """Zero value for a Python type annotation (0, "", [], ...), else None."""
    annotation = _unwrap_optional(annotation)
    value = _EMPTY.get(typing.get_origin(annotation) or annotation)
    return value() if callable(value) else value


def build_instance(model_cls: type | None, factories: dict[type, Callable[[], Any]] | None = None) -> Any:
    """Build a representative instance of ``model_cls``.

    A registered factory wins. Pydantic models and dataclasses get their
    declared defaults plus seeded samples for required fields. Other
    classes must have a no-argument constructor. Without a class a bare
    namespace stands in.
    """
    if model_cls is None:
        return SimpleNamespace()

    factory = (factories or {}).get(model_cls)
    if factory is not None:
        return factory()

    if isinstance(model_cls, type) and issubclass(model_cls, BaseModel):
        values = {
            name: sample_for_annotation(field.annotation, name)
            for name, field in model_cls.model_fields.items()
            if field.is_required()
        }
        return model_cls.model_construct(**values)

    if dataclasses.is_dataclass(model_cls):
        hints = typing.get_type_hints(model_cls)
        kwargs = {
            f.name: sample_for_annotation(hints.get(f.name), f.name)
            for f in dataclasses.fields(model_cls)
            if f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        }
        return model_cls(**kwargs)

    return model_cls()


def _unwrap_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) in (typing.Union, UnionType):
        args = [a for a in typing.get_args(annotation) if a is not NoneType]
        if len(args) == 1:
            return args[0]
    return annotation
