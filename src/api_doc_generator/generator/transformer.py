"""Response transformers and the resources that wrap them.

A transformer turns one model instance into the dict a client sees. An
Item or Collection pairs model data with a transformer, and
``serialize`` renders the resource under a top-level ``"data"`` key.
"""

import typing
from abc import ABC, abstractmethod
from typing import Any


class Transformer(ABC):
    """Base class for response transformers. Subclasses implement ``transform``."""

    @abstractmethod
    def transform(self, model: Any) -> dict:
        ...


class Item:
    def __init__(self, model: Any, transformer: Any):
        self.model = model
        self.transformer = transformer


class Collection:
    def __init__(self, models: list[Any], transformer: Any):
        self.models = list(models)
        self.transformer = transformer


def serialize(resource: Item | Collection) -> dict:
    """Render a resource as ``{"data": ...}``."""
    if isinstance(resource, Collection):
        return {"data": [resource.transformer.transform(model) for model in resource.models]}
    return {"data": resource.transformer.transform(resource.model)}


def model_type_of(transformer_cls: type) -> type | None:
    """The class annotated on the first parameter of ``transform``, if any."""
    transform = getattr(transformer_cls, "transform", None)
    if transform is None:
        return None
    try:
        hints = typing.get_type_hints(transform)
    except (NameError, TypeError):
        return None

    hints.pop("return", None)
    for annotation in hints.values():
        if isinstance(annotation, type):
            return annotation
        break
    return None
