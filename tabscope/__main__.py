"""Allow running as ``python -m tabscope``."""

from tabscope.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
