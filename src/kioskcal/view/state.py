"""Per-run view settings held in context variables."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Headers are printed unless --no-header is given
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    """Turn report headers on or off for the rest of the run.

    Args:
        value: False hides the kioskcal banner and report names
    """
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()
