# SPDX-License-Identifier: MIT

from tracklines.cleanup import register_cleanup
from tracklines.initialize import initialize
from tracklines.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
