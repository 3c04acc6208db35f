"""
Host-side hook registry.

The host owns the list of subscribers; components register handlers on
it at startup and never hold a reference back. Dispatch works as a
filter chain: each handler gets the current value and returns the value
passed to the next one, so a handler that only wants a side effect
returns what it was given.
"""

import inspect
import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

UPLOAD_DIR = "upload_dir"
ASSET_GENERATED = "asset_generated"
ASSET_DELETED = "asset_deleted"

Handler = Callable[..., Any]


class HookRegistry:
    """Ordered handlers per hook name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def add(self, hook: str, handler: Handler) -> None:
        self._handlers[hook].append(handler)
        logger.debug(
            "Registered hook handler",
            extra={"hook": hook, "handler": getattr(handler, "__qualname__", repr(handler))},
        )

    def handlers(self, hook: str) -> list[Handler]:
        return list(self._handlers.get(hook, ()))

    async def dispatch(self, hook: str, value: Any, *args: Any) -> Any:
        """
        Run value through every handler registered for hook.

        Handlers may be plain functions or coroutines. Extra positional
        args are passed to each handler after the value, unchanged.
        """
        for handler in self.handlers(hook):
            result = handler(value, *args)
            if inspect.isawaitable(result):
                result = await result
            value = result
        return value
