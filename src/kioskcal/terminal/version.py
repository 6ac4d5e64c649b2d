# SPDX-License-Identifier: MIT

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

from rich.console import Console

from kioskcal.configuration import APP_NAME


def version() -> None:
    """Print the installed kioskcal version."""
    try:
        installed = package_version(APP_NAME)
    except PackageNotFoundError:
        installed = "unknown"
    Console().print(f"{APP_NAME} {installed}")
