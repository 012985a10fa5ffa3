"""Named method channels connecting the app shell to native handlers."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Any]


class ChannelError(Exception):
    """Raised by a handler to answer a call with an error code."""

    def __init__(self, code: str, message: str, details: Any = None) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.details = details


@dataclass(frozen=True)
class ChannelResult:
    """Answer to one method call: a value, an error or "not implemented"."""

    value: Any = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Any = None
    implemented: bool = True

    @property
    def ok(self) -> bool:
        return self.implemented and self.error_code is None

    @classmethod
    def success(cls, value: Any = None) -> "ChannelResult":
        return cls(value=value)

    @classmethod
    def error(cls, code: str, message: str, details: Any = None) -> "ChannelResult":
        return cls(error_code=code, error_message=message, error_details=details)

    @classmethod
    def not_implemented(cls) -> "ChannelResult":
        return cls(implemented=False)


class MethodChannel:
    """Dispatches calls by method name to registered handlers."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: dict[str, Handler] = {}

    @property
    def methods(self) -> list[str]:
        return sorted(self._handlers)

    def register(self, method: str, handler: Handler) -> None:
        if method in self._handlers:
            raise ValueError(f"Method '{method}' is already registered on {self.name}")
        self._handlers[method] = handler

    def invoke(self, method: str, arguments: Optional[dict[str, Any]] = None) -> ChannelResult:
        """Call the handler of ``method`` with ``arguments``.

        Args:
            method: Method name sent by the app shell.
            arguments: Call arguments; empty when omitted.

        Returns:
            The handler's value wrapped in a ChannelResult, the error it
            raised as a ChannelError, or "not implemented".
        """
        handler = self._handlers.get(method)
        if handler is None:
            logger.debug("%s: no handler for %s", self.name, method)
            return ChannelResult.not_implemented()

        try:
            value = handler(arguments or {})
        except ChannelError as e:
            logger.warning("%s.%s failed: %s", self.name, method, e)
            return ChannelResult.error(e.code, e.message, e.details)
        return ChannelResult.success(value)
