"""Dependency resolution for controllers and handler arguments."""

import inspect
import typing
from collections.abc import Callable
from typing import Any, Protocol


class _NotResolvable:
    def __repr__(self) -> str:
        return "NOT_RESOLVABLE"

    def __bool__(self) -> bool:
        return False


NOT_RESOLVABLE: Any = _NotResolvable()


class DependencyResolver(Protocol):
    def resolve(self, dependency: Any) -> Any:
        """Return an instance for ``dependency`` or NOT_RESOLVABLE."""
        ...


class Container:
    """Minimal DI container: explicit instances, factory bindings and autowiring.

    Autowiring builds user classes whose constructor parameters are all
    resolvable (or have defaults). Builtins, abstract classes and
    protocols are never autowired.
    """

    def __init__(self, autowire: bool = True):
        self.autowire = autowire
        self._instances: dict[Any, Any] = {}
        self._bindings: dict[Any, Callable[[], Any]] = {}

    def instance(self, dependency: Any, obj: Any) -> None:
        self._instances[dependency] = obj

    def bind(self, dependency: Any, factory: Callable[[], Any]) -> None:
        self._bindings[dependency] = factory

    def resolve(self, dependency: Any) -> Any:
        return self._resolve(dependency, frozenset())

    def _resolve(self, dependency: Any, building: frozenset[type]) -> Any:
        if dependency in self._instances:
            return self._instances[dependency]

        factory = self._bindings.get(dependency)
        if factory is not None:
            return factory()

        if self.autowire and _is_autowirable(dependency):
            return self._build(dependency, building)
        return NOT_RESOLVABLE

    def _build(self, cls: type, building: frozenset[type]) -> Any:
        # classes under construction on this call chain only; a repeat is a cycle
        if cls in building:
            return NOT_RESOLVABLE

        building = building | {cls}
        kwargs = {}
        for name, param, annotation in parameters_of(cls):
            value = NOT_RESOLVABLE if annotation is None else self._resolve(annotation, building)
            if value is NOT_RESOLVABLE:
                if param.default is param.empty:
                    return NOT_RESOLVABLE
                continue
            kwargs[name] = value
        return cls(**kwargs)


def parameters_of(func: Callable) -> list[tuple[str, inspect.Parameter, Any]]:
    """List ``(name, parameter, annotation)`` for the named parameters of a callable.

    Annotations come from ``typing.get_type_hints`` when they can be
    evaluated; unresolvable forward references become None.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return []

    target = func.__init__ if isinstance(func, type) else func
    try:
        hints = typing.get_type_hints(target)
    except (NameError, TypeError):
        hints = {}

    result = []
    for name, param in signature.parameters.items():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        annotation = hints.get(name, param.annotation)
        if annotation is param.empty or isinstance(annotation, str):
            annotation = None
        result.append((name, param, annotation))
    return result


def _is_autowirable(dependency: Any) -> bool:
    if not isinstance(dependency, type):
        return False
    if dependency.__module__ == "builtins" or inspect.isabstract(dependency):
        return False
    return not getattr(dependency, "_is_protocol", False)
