from peerlobby.runtime.cleanup import CleanupScheduler
from peerlobby.runtime.errors import InvalidArgument, PresenceError, RoomNotFound
from peerlobby.runtime.presence import (
    JoinResult,
    PresenceRecord,
    Room,
    RoomRegistry,
    RoomSnapshot,
    SweepResult,
)
from peerlobby.runtime.signaling import PeerEvents

__all__ = [
    "CleanupScheduler",
    "InvalidArgument",
    "JoinResult",
    "PeerEvents",
    "PresenceError",
    "PresenceRecord",
    "Room",
    "RoomNotFound",
    "RoomRegistry",
    "RoomSnapshot",
    "SweepResult",
]
