from pathlib import Path
import json

from almanac.domain import TimeSnapshot


class SnapshotStore:
    """
    Handles saving and loading time snapshots.

    Snapshots are numbered by a revision counter rather than by in-world
    time, because the clock can be set backwards.
    """
    def __init__(self, root: Path | str):
        self.root = Path(root)
        self.snapshots_dir = self.root / "snapshots"
        self.snapshots_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, revision: int) -> Path:
        return self.snapshots_dir / f"state_{revision}.json"

    def save(self, snapshot: TimeSnapshot) -> Path:
        """Save a snapshot as the next revision. Returns the path written."""
        latest = self.get_latest_revision()
        path = self._path(0 if latest is None else latest + 1)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
        return path

    def load(self, revision: int) -> TimeSnapshot | None:
        """Load a snapshot revision. Returns None if it does not exist."""
        path = self._path(revision)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return TimeSnapshot.model_validate(json.load(f))

    def load_latest(self) -> TimeSnapshot | None:
        """Load the newest snapshot. Returns None if no snapshots exist."""
        latest = self.get_latest_revision()
        if latest is None:
            return None
        return self.load(latest)

    def get_latest_revision(self) -> int | None:
        """Get the newest revision number. Returns None if no snapshots exist."""
        revisions = self.list_snapshots()
        return revisions[-1] if revisions else None

    def list_snapshots(self) -> list[int]:
        """List all available snapshot revisions."""
        return sorted(
            int(x.stem.split("_")[1]) for x in self.snapshots_dir.glob("state_*.json")
        )

    def prune(self, keep: int) -> list[int]:
        """Delete all but the newest `keep` snapshots. Returns the revisions removed."""
        revisions = self.list_snapshots()
        removed = revisions[:-keep] if keep > 0 else revisions
        for revision in removed:
            self._path(revision).unlink()
        return removed
