"""Shared fixtures for extensible_error tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable


def _raise_disk_full() -> None:
    raise OSError("disk full")


@pytest.fixture
def disk_full() -> OSError:
    """A native error that has been raised and caught, so it carries a traceback."""
    try:
        _raise_disk_full()
    except OSError as e:
        return e
    raise AssertionError("unreachable")


@pytest.fixture
def fixed_capture() -> Callable[[BaseException], str]:
    """Deterministic stand-in for the native stack capture."""

    def capture(error: BaseException) -> str:
        return "OWN"

    return capture
