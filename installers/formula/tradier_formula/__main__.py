from __future__ import annotations

import sys

try:
    # python -m tradier_formula
    from .cli import main as _cli_main
except ImportError:
    # Executed by path, e.g. a bundled single-file installer.
    from tradier_formula.cli import main as _cli_main


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        return int(_cli_main(["install"]))
    return int(_cli_main(args))


if __name__ == "__main__":
    raise SystemExit(main())
