"""Module entry point: python -m coredata_gpx ..."""

from __future__ import annotations

from coredata_gpx.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
