"""Command-line interface for coredata_gpx.

Run:
    python -m coredata_gpx --sqlite-path Tracks.sqlite --output-path tracks.gpx
"""

from __future__ import annotations

import argparse
import logging
import sys

from coredata_gpx.errors import ExtractError
from coredata_gpx.extract import convert_file
from coredata_gpx.inspect import summarize_tracks
from coredata_gpx.sqlite_io import load_selection, open_database


def _cmd_list(args: argparse.Namespace) -> int:
    with open_database(args.sqlite_path) as conn:
        tracks, points, summary = load_selection(conn, args.track_name)

    for s in summarize_tracks(tracks, points):
        row = s.as_row()
        print(
            f"{row['id']}\t{row['name']}\t{row['recorded_at']}\tpoints={row['points']}\t"
            f"{row['first_point_at']}..{row['last_point_at']}"
        )
    print(f"tracks={summary.tracks_selected}/{summary.tracks_total}, points={summary.points_loaded}")
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    gpx = convert_file(
        args.sqlite_path,
        args.output_path,
        track_name=args.track_name,
        require_tracks=args.fail_on_empty,
    )
    points = sum(len(seg.points) for trk in gpx.tracks for seg in trk.segments)
    print(f"Exported {len(gpx.tracks)} tracks ({points} points) to {args.output_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""

    p = argparse.ArgumentParser(
        prog="coredata_gpx",
        description="Export tracks from a Core Data SQLite store (ZTRACK/ZCOURSEPOINT) to GPX 1.1.",
    )
    p.add_argument("-s", "--sqlite-path", type=str, required=True, help="Source SQLite database")
    p.add_argument("-o", "--output-path", type=str, default=None, help="Destination GPX file (overwritten)")
    p.add_argument("-t", "--track-name", type=str, default=None, help="Only export tracks with exactly this name")
    p.add_argument("--list", action="store_true", help="Print the selected tracks instead of writing GPX")
    p.add_argument(
        "--fail-on-empty",
        action="store_true",
        help="Exit with an error when no track matches instead of writing an empty document",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.list and args.output_path is None:
        parser.error("the following arguments are required: -o/--output-path")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.list:
            return _cmd_list(args)
        return _cmd_convert(args)
    except ExtractError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
