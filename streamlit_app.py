from __future__ import annotations

from pathlib import Path

import streamlit as st

from coredata_gpx.assemble import build_gpx
from coredata_gpx.errors import ExtractError
from coredata_gpx.gpx_io import gpx_to_xml
from coredata_gpx.inspect import TrackSummary, summarize_tracks
from coredata_gpx.models import TrackPointRecord, TrackRecord
from coredata_gpx.sqlite_io import LoadSummary, load_selection, open_database


@st.cache_data(show_spinner=False)
def _load(
    db_path: str, track_name: str | None, mtime: float
) -> tuple[list[TrackRecord], list[TrackPointRecord], LoadSummary]:
    _ = mtime  # part of cache key so updated files reload automatically
    with open_database(db_path) as conn:
        return load_selection(conn, track_name)


def _hhmmss(seconds: float) -> str:
    s = int(round(max(0.0, seconds)))
    return f"{s // 3600:02d}:{(s % 3600) // 60:02d}:{s % 60:02d}"


def _duration(summary: TrackSummary) -> str:
    if summary.first_point_at is None or summary.last_point_at is None:
        return ""
    return _hhmmss((summary.last_point_at - summary.first_point_at).total_seconds())


def main() -> None:
    st.set_page_config(page_title="Core Data tracks to GPX", layout="wide")
    st.title("Core Data tracks to GPX")

    with st.sidebar:
        st.subheader("Source")
        db_path = st.text_input("SQLite path", value="Tracks.sqlite")
        track_name = st.text_input("Track name (exact match, empty = all)", value="").strip() or None
        fail_on_empty = st.checkbox("Treat an empty selection as an error", value=False)

    p = Path(db_path)
    if not p.exists():
        st.error(f"File not found: {db_path!r}")
        return

    try:
        tracks, points, summary = _load(db_path, track_name, p.stat().st_mtime)
        gpx = build_gpx(tracks, points, require_tracks=fail_on_empty)
        xml = gpx_to_xml(gpx)
    except ExtractError as exc:
        st.error(str(exc))
        return

    st.subheader("Summary")
    c1, c2, c3 = st.columns(3)
    c1.metric("Selected tracks", str(summary.tracks_selected))
    c2.metric("Tracks in database", str(summary.tracks_total))
    c3.metric("Points", str(summary.points_loaded))

    summaries = summarize_tracks(tracks, points)
    rows = [s.as_row() | {"duration": _duration(s)} for s in summaries]
    st.dataframe(rows, use_container_width=True, height=420)

    out_name = f"{p.stem}.gpx" if track_name is None else f"{track_name}.gpx"
    st.download_button(
        "Download GPX",
        data=xml.encode("utf-8"),
        file_name=out_name,
        mime="application/gpx+xml",
        type="primary",
    )

    st.caption("Timestamps are UTC. Each track is written as a single segment.")


if __name__ == "__main__":
    main()
