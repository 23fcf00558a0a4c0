from pathlib import Path
from typing import Sequence

from almanac.domain import ClockEvent, ClockEventAdapter


class EventLog:
    """
    Append-only JSONL log of clock notifications.

    Subscribe `append` to an engine with `engine.on_event(log.append)` to keep
    a history of everything the clock announced.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.path = self.root / "events.jsonl"

    def append(self, event: ClockEvent) -> None:
        """Append a single event."""
        self.append_all([event])

    def append_all(self, events: Sequence[ClockEvent]) -> None:
        if not events:
            return
        with open(self.path, "a", encoding="utf-8") as f:
            for event in events:
                f.write(event.model_dump_json() + "\n")

    def read_all(self) -> list[ClockEvent]:
        """Read every event in the log, oldest first."""
        if not self.path.exists():
            return []
        events = []
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    events.append(ClockEventAdapter.validate_json(line))
        return events

    def get_recent(
        self,
        limit: int = 20,
        event_types: set[str] | None = None,
    ) -> list[ClockEvent]:
        """
        Get the most recent events.

        Args:
            limit: Maximum number of events to return
            event_types: Optional set of event.type values to include

        Returns:
            Events in chronological order
        """
        events = self.read_all()
        if event_types:
            events = [e for e in events if e.type in event_types]
        return events[-limit:] if limit > 0 else []
