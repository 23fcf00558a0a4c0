"""
Persistence hooks.

The engine commits every new snapshot by awaiting a hook before it swaps the
snapshot in. Anything matching `PersistHook` can be injected; FilePersistence
writes JSON snapshots through a SnapshotStore.
"""

import logging
from pathlib import Path
from typing import Awaitable, Callable

from almanac.domain import TimeSnapshot
from almanac.logging_config import log_storage
from .snapshot_store import SnapshotStore


logger = logging.getLogger(__name__)

PersistHook = Callable[[TimeSnapshot], Awaitable[None]]


class FilePersistence:
    """Persist snapshots as numbered JSON files under `root/snapshots`."""

    def __init__(self, root: Path | str, keep: int | None = None):
        """
        Args:
            root: Directory that holds the snapshots folder
            keep: If set, prune to this many snapshots after each save
        """
        self.store = SnapshotStore(root)
        self.keep = keep

    async def __call__(self, snapshot: TimeSnapshot) -> None:
        try:
            path = self.store.save(snapshot)
        except OSError as e:
            log_storage(logger, "save snapshot", self.store.snapshots_dir, success=False, details=str(e))
            raise
        log_storage(logger, "save snapshot", path, details=f"minute={snapshot.absolute_minute}")
        if self.keep is not None:
            removed = self.store.prune(self.keep)
            if removed:
                log_storage(logger, "prune snapshots", details=f"removed={len(removed)}")

    def load_latest(self) -> TimeSnapshot | None:
        return self.store.load_latest()
