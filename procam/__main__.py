"""Allow ``python -m procam`` to run the virtual camera CLI."""

from __future__ import annotations

import sys


def main() -> None:
    from procam import run
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
