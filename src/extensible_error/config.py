"""Configuration for extensible_error reporting."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ReportConfig"]


@dataclass
class ReportConfig:
    """Settings for :mod:`extensible_error.report`.

    Attributes:
        show_trace: Print the merged trace below the summary line.
        header_style: Rich style applied to the ``<name>: <message>`` line.
        stderr: Print to stderr when no console is given.
    """

    show_trace: bool = True
    header_style: str = "bold red"
    stderr: bool = True
