"""The extensible base error.

``ExtensibleError`` is meant to be subclassed. Every subclass reports its
own class name, and any instance can wrap an earlier error so that the
earlier error's summary and trace are appended to its own::

    class StorageError(ExtensibleError):
        pass

    try:
        write_block()
    except OSError as e:
        raise StorageError("could not persist block", e) from e

Construction never logs and never performs I/O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from extensible_error.trace import capture_trace, is_error_like, merge_traces, summary_of, trace_of

if TYPE_CHECKING:
    from typing import Self

    from rich.text import Text

    from extensible_error.trace import TraceCapturer

__all__ = ["ExtensibleError", "InvalidConstructionArgsError"]

_MAX_ARGS = 2


class InvalidConstructionArgsError(TypeError):
    """Raised when ``ExtensibleError`` receives arguments it cannot classify."""


def _classify(args: tuple[Any, ...]) -> tuple[str | None, Any]:
    """Split positional arguments into ``(message, wrapped)`` by type.

    Arguments that are neither strings nor error-like are dropped.
    """
    if len(args) > _MAX_ARGS:
        raise InvalidConstructionArgsError(
            f"Expected at most {_MAX_ARGS} positional arguments, got {len(args)}"
        )

    message: str | None = None
    wrapped: Any = None
    for arg in args:
        if isinstance(arg, str):
            if message is not None:
                raise InvalidConstructionArgsError("Got two messages, expected at most one string")
            message = arg
        elif is_error_like(arg):
            if wrapped is not None:
                raise InvalidConstructionArgsError(
                    "Got two errors to wrap, expected at most one error"
                )
            wrapped = arg
    return message, wrapped


class ExtensibleError(Exception):
    """Base class for named, optionally wrapping, custom errors.

    Accepts ``(message)``, ``(wrapped)`` or ``(message, wrapped)``. With a
    wrapped error the instance's ``trace`` is its own construction-site trace
    followed by the wrapped error's summary line and full trace. Without a
    message the wrapped error's summary becomes the message.

    Attributes:
        message: Message given at construction, or the wrapped error's summary.
        wrapped_error: The wrapped error-like value, if any.

    Subclasses can change how the own trace is captured by overriding
    ``trace_capturer``, or per instance with the ``capture`` keyword.
    """

    trace_capturer: ClassVar[TraceCapturer] = staticmethod(capture_trace)

    def __init__(self, *args: Any, capture: TraceCapturer | None = None) -> None:
        message, wrapped = _classify(args)
        summary = summary_of(wrapped) if wrapped is not None else ""
        if message is None:
            message = summary

        super().__init__(message)
        self.message: str = message
        self.wrapped_error: Any = wrapped
        self._name = type(self).__name__

        capturer = capture if capture is not None else type(self).trace_capturer
        self._own_trace: str = capturer(self)
        if wrapped is None:
            self._trace = self._own_trace
            return

        wrapped_trace = trace_of(wrapped)
        self._trace = merge_traces(self._own_trace, summary, wrapped_trace)
        if isinstance(wrapped, BaseException):
            self.__cause__ = wrapped
        else:
            # Native tracebacks only follow exception causes; carry the chain as a note.
            self.add_note(f"{summary}\n{wrapped_trace}")

    @property
    def name(self) -> str:
        """Name of the concrete error class.

        Subclasses may override it with a class attribute or a property, or
        assign a new value after calling ``super().__init__``.
        """
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def own_trace(self) -> str:
        """Trace captured where this error was constructed."""
        return self._own_trace

    @property
    def trace(self) -> str:
        """Own trace, followed by the wrapped error's summary and trace."""
        return self._trace

    @classmethod
    def from_message(cls, message: str, *, capture: TraceCapturer | None = None) -> Self:
        if not isinstance(message, str):
            raise InvalidConstructionArgsError(
                f"message must be a string, got {type(message).__name__}"
            )
        return cls(message, capture=capture)

    @classmethod
    def from_cause(cls, error: Any, *, capture: TraceCapturer | None = None) -> Self:
        if not is_error_like(error):
            raise InvalidConstructionArgsError(
                f"error must be an exception or carry a trace, got {type(error).__name__}"
            )
        return cls(error, capture=capture)

    @classmethod
    def from_message_and_cause(
        cls,
        message: str,
        error: Any,
        *,
        capture: TraceCapturer | None = None,
    ) -> Self:
        if not isinstance(message, str):
            raise InvalidConstructionArgsError(
                f"message must be a string, got {type(message).__name__}"
            )
        if not is_error_like(error):
            raise InvalidConstructionArgsError(
                f"error must be an exception or carry a trace, got {type(error).__name__}"
            )
        return cls(message, error, capture=capture)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.name}({self.message!r})"

    def __rich__(self) -> Text:
        from extensible_error.report import render_report

        return render_report(self)
