"""Registry pattern for Alexa turn handlers.

Every inbound request resolves to exactly one ``IntentKind``. Handler classes
register themselves against a kind with a decorator, and the dispatcher refuses
to start unless every kind has a handler.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional, TypeVar

if TYPE_CHECKING:
    from statusbot_lite.alexa.alexa_handlers import TurnHandler

# TypeVar for preserving handler class types through the decorator
_HandlerT = TypeVar("_HandlerT", bound="TurnHandler")


class IntentKind(Enum):
    """Closed set of turns the skill handles."""

    LAUNCH = "LaunchRequest"
    CLEAR_STATUS = "SlackClearStatusIntent"
    BUSY = "SlackBusyIntent"
    STOP = "AMAZON.StopIntent"
    CANCEL = "AMAZON.CancelIntent"
    HELP = "AMAZON.HelpIntent"
    SESSION_ENDED = "SessionEndedRequest"
    UNHANDLED = "Unhandled"

    @classmethod
    def resolve(cls, request_type: str, intent_name: Optional[str]) -> IntentKind:
        """Map an Alexa request type and intent name to a kind.

        Examples:
            >>> IntentKind.resolve("LaunchRequest", None)
            <IntentKind.LAUNCH: 'LaunchRequest'>
            >>> IntentKind.resolve("IntentRequest", "AMAZON.FallbackIntent")
            <IntentKind.UNHANDLED: 'Unhandled'>
        """
        if request_type == "LaunchRequest":
            return cls.LAUNCH
        if request_type == "SessionEndedRequest":
            return cls.SESSION_ENDED
        if request_type == "IntentRequest" and intent_name in _INTENT_NAMES:
            return _INTENT_NAMES[intent_name]
        return cls.UNHANDLED


_INTENT_NAMES: dict[str, IntentKind] = {
    kind.value: kind
    for kind in (
        IntentKind.CLEAR_STATUS,
        IntentKind.BUSY,
        IntentKind.STOP,
        IntentKind.CANCEL,
        IntentKind.HELP,
    )
}


@dataclass
class HandlerInfo:
    """Metadata about a registered turn handler.

    Attributes:
        kind: The intent kind handled
        handler_class: The handler class to instantiate
        description: Human-readable description of the handler
        requires_account: Whether the turn needs a linked Slack account
    """

    kind: IntentKind
    handler_class: type[TurnHandler]
    description: str
    requires_account: bool = False


class TurnHandlerRegistry:
    """Registry mapping intent kinds to turn handler classes.

    Example:
        @TurnHandlerRegistry.register(
            IntentKind.HELP,
            description="Speaks usage instructions",
        )
        class HelpHandler(TurnHandler):
            ...
    """

    _handlers: ClassVar[dict[IntentKind, HandlerInfo]] = {}

    @classmethod
    def register(
        cls,
        kind: IntentKind,
        description: str,
        requires_account: bool = False,
    ) -> Callable[[type[_HandlerT]], type[_HandlerT]]:
        """Decorator to register a turn handler for ``kind``."""

        def decorator(handler_class: type[_HandlerT]) -> type[_HandlerT]:
            cls._handlers[kind] = HandlerInfo(
                kind=kind,
                handler_class=handler_class,
                description=description,
                requires_account=requires_account,
            )
            return handler_class

        return decorator

    @classmethod
    def get_handlers(cls) -> dict[IntentKind, HandlerInfo]:
        return cls._handlers.copy()

    @classmethod
    def get_handler(cls, kind: IntentKind) -> HandlerInfo | None:
        return cls._handlers.get(kind)

    @classmethod
    def missing_kinds(cls) -> list[IntentKind]:
        """Intent kinds with no registered handler."""
        return [kind for kind in IntentKind if kind not in cls._handlers]

    @classmethod
    def clear(cls) -> None:
        """Clear all registered handlers.

        Note: This is primarily useful for testing.
        """
        cls._handlers.clear()


def get_handler_info_summary() -> str:
    """Get a summary of all registered handlers.

    Example:
        >>> print(get_handler_info_summary())
        Registered turn handlers:
        - AMAZON.CancelIntent: Acknowledges and ends the session
        ...
    """
    handlers = TurnHandlerRegistry.get_handlers()
    if not handlers:
        return "No turn handlers registered."

    lines = ["Registered turn handlers:"]
    for kind, info in sorted(handlers.items(), key=lambda item: item[0].value):
        suffix = " (linked account)" if info.requires_account else ""
        lines.append(f"- {kind.value}: {info.description}{suffix}")
    return "\n".join(lines)
