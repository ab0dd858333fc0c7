"""Trace capture and extraction for extensible errors.

The own trace of an error comes from a *trace capturer*: a callable that
receives the error under construction and returns its construction-site
stack as text. ``capture_trace`` is the default capturer and defers to
Python's own ``traceback`` formatting so the output matches what a native
traceback would show for the same frames.

The remaining helpers read the summary line and trace out of an arbitrary
error-like value, degrading to empty strings when the value carries no
usable trace information.
"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import FrameType

__all__ = [
    "SupportsTrace",
    "TraceCapturer",
    "capture_trace",
    "format_frames",
    "is_error_like",
    "merge_traces",
    "summary_of",
    "trace_of",
]

TraceCapturer = Callable[[BaseException], str]

# Frames from these modules belong to error construction, not to the caller.
_CONSTRUCTION_MODULES = frozenset({"extensible_error.error", __name__})

_UNPRINTABLE = "<exception str() failed>"


@runtime_checkable
class SupportsTrace(Protocol):
    """Anything carrying a pre-rendered ``trace`` string."""

    trace: str


def _is_construction_frame(frame: FrameType, error: BaseException) -> bool:
    """True for frames of the error's own ``__init__`` chain or its factories."""
    if frame.f_globals.get("__name__") in _CONSTRUCTION_MODULES:
        return True
    return frame.f_code.co_name == "__init__" and frame.f_locals.get("self") is error


def format_frames(frame: FrameType | None) -> str:
    """Format the stack ending at *frame*, oldest call first."""
    if frame is None:
        return ""
    return "".join(traceback.format_list(traceback.extract_stack(frame))).rstrip("\n")


def capture_trace(error: BaseException) -> str:
    """Capture the stack at the point where *error* is being constructed.

    Frames belonging to the construction machinery (this package and every
    ``__init__`` bound to *error*, including those of subclasses) are
    skipped, so the innermost frame shown is the line that built the error.
    """
    frame: FrameType | None = sys._getframe(1)
    while frame is not None and _is_construction_frame(frame, error):
        frame = frame.f_back
    return format_frames(frame)


def _safe_getattr(value: Any, name: str) -> Any:
    try:
        return getattr(value, name, None)
    except Exception:
        return None


def is_error_like(value: Any) -> bool:
    """True if *value* is an exception or exposes a string ``trace``."""
    if isinstance(value, BaseException):
        return True
    return isinstance(_safe_getattr(value, "trace"), str)


def summary_of(value: Any) -> str:
    """Return the one-line ``Name: message`` summary of an error-like value.

    Values exposing string ``name`` and ``message`` attributes are summarised
    from those. Other exceptions use the bare class name and ``str()``, the
    same way the last line of a native traceback reads. An empty message
    leaves only the name.
    """
    name = _safe_getattr(value, "name")
    message = _safe_getattr(value, "message")
    if not (isinstance(name, str) and isinstance(message, str)):
        name = type(value).__name__
        try:
            message = str(value)
        except Exception:
            message = _UNPRINTABLE
    return f"{name}: {message}" if message else name


def trace_of(value: Any) -> str:
    """Return the full trace of an error-like value, or ``""`` if it has none."""
    trace = _safe_getattr(value, "trace")
    if isinstance(trace, str):
        return trace
    if isinstance(value, BaseException) and value.__traceback__ is not None:
        return "".join(traceback.format_tb(value.__traceback__)).rstrip("\n")
    return ""


def merge_traces(own: str, summary: str, wrapped_trace: str) -> str:
    """Join an own trace with a wrapped error's summary and trace, newest first."""
    return "\n".join([own, summary, wrapped_trace])
