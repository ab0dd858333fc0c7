"""extensible_error: named custom errors that wrap and chain their causes."""

from extensible_error.error import ExtensibleError, InvalidConstructionArgsError
from extensible_error.report import (
    format_report,
    install_excepthook,
    print_report,
    uninstall_excepthook,
)
from extensible_error.trace import capture_trace

__version__ = "0.1.0"

__all__ = [
    "ExtensibleError",
    "InvalidConstructionArgsError",
    "__version__",
    "capture_trace",
    "format_report",
    "install_excepthook",
    "print_report",
    "uninstall_excepthook",
]
