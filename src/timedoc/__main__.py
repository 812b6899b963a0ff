"""Entry point for running as a module: python -m timedoc"""

from timedoc.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
