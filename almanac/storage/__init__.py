from .snapshot_store import SnapshotStore
from .event_log import EventLog
from .persistence import FilePersistence, PersistHook

__all__ = [
    "SnapshotStore",
    "EventLog",
    "FilePersistence",
    "PersistHook",
]
