"""Unified data models for route documentation.

Routes come in from the caller's route table, annotation blocks are parsed
from handler docstrings, and documentation records go out to whatever
renders them. All models are frozen once built.
"""

import importlib
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ParamType = Literal["integer", "string", "boolean", "number", "object", "array"]

PARAM_TYPES: tuple[str, ...] = ("integer", "string", "boolean", "number", "object", "array")


class HandlerReference(BaseModel):
    """Binding from a route to a controller method or a plain function."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    controller: type | None = None
    method: str | None = None
    func: Callable | None = None

    @model_validator(mode="after")
    def _check_target(self) -> "HandlerReference":
        if self.func is not None:
            return self
        if self.controller is None or not self.method:
            raise ValueError("Handler needs either a function or a controller and method name")
        if not callable(getattr(self.controller, self.method, None)):
            raise ValueError(f"{self.controller.__name__} has no method {self.method!r}")
        return self

    @classmethod
    def from_target(cls, target: Any) -> "HandlerReference":
        """Build a reference from the forms a route table hands out.

        Accepts ``(Controller, "method")``, ``"pkg.module:Controller@method"``,
        ``"pkg.module:function"`` or a callable.
        """
        if isinstance(target, HandlerReference):
            return target
        if isinstance(target, tuple):
            controller, method = target
            return cls(controller=controller, method=method)
        if isinstance(target, str):
            return cls._from_string(target)
        if callable(target):
            return cls(func=target)
        raise TypeError(f"Unsupported handler reference: {target!r}")

    @classmethod
    def _from_string(cls, target: str) -> "HandlerReference":
        module_name, sep, attr = target.partition(":")
        if not sep or not attr:
            raise ValueError(f"Handler reference must look like 'module:Class@method', got {target!r}")

        module = importlib.import_module(module_name)
        name, _, method = attr.partition("@")
        try:
            obj = getattr(module, name)
        except AttributeError:
            raise ValueError(f"Module {module_name!r} has no attribute {name!r}") from None

        if method:
            return cls(controller=obj, method=method)
        return cls(func=obj)

    @property
    def declaration(self) -> Callable:
        """The function object whose docstring documents the route."""
        if self.func is not None:
            return self.func
        return getattr(self.controller, self.method)

    @property
    def module(self) -> str:
        """Module the handler is declared in, used to resolve tag class names."""
        owner = self.controller if self.controller is not None else self.func
        return getattr(owner, "__module__", "") or ""

    @property
    def label(self) -> str:
        if self.func is not None:
            return getattr(self.func, "__qualname__", repr(self.func))
        return f"{self.controller.__name__}@{self.method}"


class Route(BaseModel):
    """A single route: HTTP methods, path and the handler bound to it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    methods: tuple[str, ...]
    path: str
    handler: HandlerReference

    @field_validator("methods", mode="before")
    @classmethod
    def _normalize_methods(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        elif isinstance(value, (set, frozenset)):
            value = sorted(value)
        methods = tuple(m.upper() for m in value)
        if not methods:
            raise ValueError("A route needs at least one HTTP method")
        return methods

    @field_validator("handler", mode="before")
    @classmethod
    def _coerce_handler(cls, value: Any) -> HandlerReference:
        return HandlerReference.from_target(value)


class AnnotationBlock(BaseModel):
    """Tags and free text parsed from one docstring.

    Tag names are stored lower-cased, so lookups are case-insensitive.
    """

    model_config = ConfigDict(frozen=True)

    tags: dict[str, str] = {}  # last occurrence wins
    occurrences: list[tuple[str, str]] = []  # every tag, in source order
    free_text: str = ""

    def has(self, name: str) -> bool:
        return name.lower() in self.tags

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.tags.get(name.lower(), default)

    def all(self, name: str) -> list[str]:
        name = name.lower()
        return [body for tag, body in self.occurrences if tag == name]


class AnnotationScopes(BaseModel):
    """Class-level and method-level blocks; the method level overrides."""

    model_config = ConfigDict(frozen=True)

    class_scope: AnnotationBlock = Field(default_factory=AnnotationBlock)
    method_scope: AnnotationBlock = Field(default_factory=AnnotationBlock)

    def lookup(self, name: str) -> str | None:
        """Return the method-level tag body, falling back to the class level."""
        body = self.method_scope.get(name)
        if body is None:
            body = self.class_scope.get(name)
        return body


_EXAMPLE_TYPES: dict[str, tuple[type, ...]] = {
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "string": (str,),
    "object": (dict,),
    "array": (list,),
}


class ParameterDeclaration(BaseModel):
    """A documented body parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParamType
    required: bool = False
    description: str = ""
    example: Any = None

    @model_validator(mode="after")
    def _check_example(self) -> "ParameterDeclaration":
        if self.example is None:
            return self
        # bool is an int subclass; keep it out of the numeric kinds
        is_bool = isinstance(self.example, bool)
        if (is_bool and self.type != "boolean") or not isinstance(self.example, _EXAMPLE_TYPES[self.type]):
            raise ValueError(f"Example {self.example!r} does not match type {self.type}")
        return self


class DocumentationRecord(BaseModel):
    """Everything documented about one route."""

    model_config = ConfigDict(frozen=True)

    id: str
    uri: str
    title: str
    description: str
    group: str
    authenticated: bool
    methods: list[str]
    parameters: dict[str, ParameterDeclaration]
    showresponse: bool
    response: str | None = None
