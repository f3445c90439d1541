from __future__ import annotations

from pathlib import Path

from jellyjam.engine.match import MatchConfig, new_match, run_match
from jellyjam.engine.selection import RandomSelector
from jellyjam.paths import get_paths
from jellyjam.services.content import ContentService
from jellyjam.services.telemetry import TelemetryService


def test_log_appends_jsonl_records(tmp_path: Path) -> None:
    telemetry = TelemetryService(tmp_path / "nested" / "telemetry.jsonl")
    assert telemetry.read_all() == []
    telemetry.log("boot", {"ok": True})
    telemetry.log("match_start", {"seed": 4})
    records = telemetry.read_all()
    assert [r["type"] for r in records] == ["boot", "match_start"]
    assert records[1]["payload"] == {"seed": 4}
    assert "ts" in records[0]


def test_match_milestones_are_forwarded(tmp_path: Path) -> None:
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_catalog()
    state = new_match(catalog, seed=8, config=MatchConfig(player_count=3, victory_threshold=1))
    assert state is not None
    run_match(state, RandomSelector())

    telemetry = TelemetryService(tmp_path / "t.jsonl")
    telemetry.log_match_events(state, state.event_log)
    records = telemetry.read_all()
    assert [r["type"] for r in records] == ["round_end", "match_end"]
    assert records[1]["payload"]["winner"] == state.winner
    assert records[1]["payload"]["seed"] == 8
