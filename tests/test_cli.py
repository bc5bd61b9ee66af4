from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import gpxpy
import pytest

from coredata_gpx.cli import main


def _parse(path: Path):
    return gpxpy.parse(path.read_text(encoding="utf-8"))


def test_exports_all_tracks_in_load_order(db_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "all.gpx"
    assert main(["--sqlite-path", str(db_path), "--output-path", str(out)]) == 0

    gpx = _parse(out)
    assert [t.name for t in gpx.tracks] == ["Morning Run", "Evening Walk"]
    assert [len(t.segments[0].points) for t in gpx.tracks] == [3, 2]
    first = gpx.tracks[0].segments[0].points[0]
    assert first.time == datetime(2001, 1, 1, 0, 0, 10, tzinfo=UTC)
    assert gpx.tracks[1].description == "Track Timestamp: 2001-01-02T00:00:00Z"


def test_track_name_filter(db_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "run.gpx"
    assert main(["-s", str(db_path), "-o", str(out), "-t", "Morning Run"]) == 0

    gpx = _parse(out)
    assert [t.name for t in gpx.tracks] == ["Morning Run"]
    lats = [p.latitude for p in gpx.tracks[0].segments[0].points]
    assert lats == [47.0, 47.1, 47.2]


def test_no_match_writes_empty_document(db_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "none.gpx"
    assert main(["-s", str(db_path), "-o", str(out), "-t", "Nope"]) == 0
    assert _parse(out).tracks == []


def test_fail_on_empty(db_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "none.gpx"
    assert main(["-s", str(db_path), "-o", str(out), "-t", "Nope", "--fail-on-empty"]) == 1
    assert "error: no track matched" in capsys.readouterr().err
    assert not out.exists()


def test_missing_database(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out.gpx"
    assert main(["-s", str(tmp_path / "missing.sqlite"), "-o", str(out)]) == 1
    assert "database file not found" in capsys.readouterr().err
    assert not out.exists()


def test_orphan_points_are_not_possible_through_the_loader(make_db, tmp_path: Path) -> None:
    # Points of unselected tracks are filtered by the query itself.
    db = make_db(points=[(1, 1.0, 1.0, 1.0, 1.0), (7, 2.0, 2.0, 2.0, 2.0)])
    out = tmp_path / "out.gpx"
    assert main(["-s", str(db), "-o", str(out)]) == 0
    assert [len(t.segments[0].points) for t in _parse(out).tracks] == [1, 0]


def test_output_path_required_without_list(db_path: Path) -> None:
    with pytest.raises(SystemExit) as info:
        main(["-s", str(db_path)])
    assert info.value.code == 2


def test_list_mode(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-s", str(db_path), "--list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("1\tMorning Run\t2001-01-01T00:00:00Z\tpoints=3")
    assert lines[1].startswith("2\tEvening Walk\t2001-01-02T00:00:00Z\tpoints=2")
    assert lines[-1] == "tracks=2/2, points=5"


@pytest.mark.parametrize(
    ("tracks", "points", "column"),
    [
        ([(1, "a", 0.0)], [(1, 1.0, 1.0, 1.0, float("inf"))], "ZCOURSEPOINT.ZDATE"),
        ([(1, "a", 1e15)], [], "ZTRACK.ZDATE"),
    ],
)
def test_unconvertible_timestamp_is_reported(
    make_db, tmp_path: Path, capsys: pytest.CaptureFixture[str], tracks, points, column: str
) -> None:
    db = make_db(tracks=tracks, points=points)
    out = tmp_path / "out.gpx"

    assert main(["-s", str(db), "-o", str(out)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: invalid ")
    assert column in err and "track 1" in err
    assert not out.exists()

    assert main(["-s", str(db), "--list"]) == 1
    assert column in capsys.readouterr().err
