from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from jellyjam.engine.match import MatchState


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_match_events(self, state: MatchState, events: list[dict[str, object]]) -> None:
        """Forward the round/match milestones of one engine step."""
        for ev in events:
            kind = ev.get("type")
            if kind == "ROUND_WON":
                self.log("round_end", {"seed": state.seed, **ev})
            elif kind == "GAME_ENDED":
                self.log("match_end", {"seed": state.seed, "rounds": state.current_round, **ev})

    def read_all(self) -> list[dict[str, object]]:
        if not self.path.exists():
            return []
        out: list[dict[str, object]] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                out.append(json.loads(line))
        return out
