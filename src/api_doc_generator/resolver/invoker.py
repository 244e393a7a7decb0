"""Calls route handlers."""

import asyncio
import inspect
from collections.abc import Callable
from typing import Any, Protocol


class Invoker(Protocol):
    def call(self, handler: Callable, arguments: dict[str, Any]) -> Any:
        ...


class DirectInvoker:
    """Calls the handler in-process. Coroutine handlers are run to completion."""

    def call(self, handler: Callable, arguments: dict[str, Any]) -> Any:
        result = handler(**arguments)
        if inspect.iscoroutine(result):
            result = asyncio.run(result)
        return result
