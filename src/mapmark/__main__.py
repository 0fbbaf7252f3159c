"""Module entrypoint for ``python -m mapmark``."""

from mapmark.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
