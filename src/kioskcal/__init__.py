# SPDX-License-Identifier: MIT

from kioskcal.cleanup import register_cleanup
from kioskcal.initialize import initialize
from kioskcal.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
