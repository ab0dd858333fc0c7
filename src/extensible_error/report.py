"""Reporting for extensible errors.

Renders an error as ``<name>: <message>`` followed by its merged trace,
either as plain text or through a Rich console, and optionally takes over
``sys.excepthook`` and ``threading.excepthook`` so uncaught extensible
errors are reported that way.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import TYPE_CHECKING, NamedTuple

from rich.console import Console
from rich.text import Text

from extensible_error.config import ReportConfig
from extensible_error.error import ExtensibleError
from extensible_error.trace import summary_of, trace_of

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

__all__ = [
    "format_report",
    "install_excepthook",
    "print_report",
    "render_report",
    "uninstall_excepthook",
]

logger = logging.getLogger(__name__)


class _InstalledHooks(NamedTuple):
    hook: Callable[..., object]
    previous: Callable[..., object]
    thread_hook: Callable[..., object]
    previous_thread: Callable[..., object]


_installed: _InstalledHooks | None = None


def format_report(error: BaseException, *, show_trace: bool = True) -> str:
    """Render *error* as its summary line followed by its trace.

    Extensible errors show their merged trace. Other exceptions show their
    native traceback, if they were raised.
    """
    header = summary_of(error)
    trace = trace_of(error) if show_trace else ""
    if not trace:
        return header
    return f"{header}\n{trace}"


def render_report(error: BaseException, config: ReportConfig | None = None) -> Text:
    """Build a Rich ``Text`` report with a styled header line."""
    cfg = config or ReportConfig()
    text = Text(summary_of(error), style=cfg.header_style)
    trace = trace_of(error) if cfg.show_trace else ""
    if trace:
        text.append("\n")
        text.append(trace)
    return text


def print_report(
    error: BaseException,
    console: Console | None = None,
    config: ReportConfig | None = None,
) -> None:
    """Print the report for *error* to *console* (stderr by default)."""
    cfg = config or ReportConfig()
    if console is None:
        console = Console(stderr=cfg.stderr)
    console.print(render_report(error, cfg), highlight=False, soft_wrap=True)


def install_excepthook(config: ReportConfig | None = None) -> None:
    """Report uncaught ``ExtensibleError`` instances with :func:`print_report`.

    Both ``sys.excepthook`` and ``threading.excepthook`` are replaced, so
    errors escaping worker threads are reported the same way. Other
    exceptions are passed to the hooks that were active before. Calling this
    again while installed does nothing.
    """
    global _installed
    if _installed is not None:
        logger.debug("Excepthook already installed")
        return

    cfg = config or ReportConfig()
    previous = sys.excepthook
    previous_thread = threading.excepthook

    def hook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if isinstance(exc, ExtensibleError):
            print_report(exc, config=cfg)
        else:
            previous(exc_type, exc, tb)

    def thread_hook(args: threading.ExceptHookArgs) -> None:
        if isinstance(args.exc_value, ExtensibleError):
            print_report(args.exc_value, config=cfg)
        else:
            previous_thread(args)

    sys.excepthook = hook
    threading.excepthook = thread_hook
    _installed = _InstalledHooks(hook, previous, thread_hook, previous_thread)
    logger.debug("Installed excepthooks (replacing %r, %r)", previous, previous_thread)


def uninstall_excepthook() -> None:
    """Restore the hooks that :func:`install_excepthook` replaced.

    A hook that was replaced again by someone else is left in place.
    """
    global _installed
    if _installed is None:
        return
    installed = _installed
    _installed = None

    if sys.excepthook is installed.hook:
        sys.excepthook = installed.previous
        logger.debug("Restored excepthook %r", installed.previous)
    else:
        logger.debug("Excepthook was replaced by another hook, leaving it in place")

    if threading.excepthook is installed.thread_hook:
        threading.excepthook = installed.previous_thread
        logger.debug("Restored threading excepthook %r", installed.previous_thread)
    else:
        logger.debug("Threading excepthook was replaced by another hook, leaving it in place")
