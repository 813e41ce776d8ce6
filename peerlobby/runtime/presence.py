"""
In-memory room presence registry.

Rooms are created lazily by the first join and removed as soon as their last
participant leaves, is evicted by a sweep, or disconnects. Every room carries
its own lock; the registry lock only guards the room mapping itself and is
always taken *after* a room lock, never before one.
"""
from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any

from peerlobby.runtime.errors import RoomNotFound


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


Clock = Callable[[], datetime]


@dataclass(frozen=True)
class PresenceRecord:
    peer_id: str
    attributes: Mapping[str, Any]
    joined_at: datetime


@dataclass(frozen=True)
class RoomSnapshot:
    """Immutable copy of a room, safe to hand out after the lock is released."""
    room_id: str
    created_at: datetime
    participants: tuple[PresenceRecord, ...]

    @property
    def participant_count(self) -> int:
        return len(self.participants)


@dataclass(frozen=True)
class JoinResult:
    room_id: str
    participant_count: int
    other_participants: tuple[PresenceRecord, ...]
    created: bool = False


@dataclass(frozen=True)
class SweepResult:
    evicted_participants: int = 0
    removed_rooms: int = 0


@dataclass(eq=False)
class Room:
    room_id: str
    created_at: datetime
    # peer_id -> record; dict order is join order
    participants: dict[str, PresenceRecord] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    retired: bool = False

    def __len__(self) -> int:
        return len(self.participants)

    def upsert(self, record: PresenceRecord) -> None:
        # re-inserting moves a rejoining peer to the end of the order
        self.participants.pop(record.peer_id, None)
        self.participants[record.peer_id] = record

    def remove(self, peer_id: str) -> bool:
        return self.participants.pop(peer_id, None) is not None

    def expire(self, cutoff: datetime) -> int:
        stale = [pid for pid, rec in self.participants.items() if rec.joined_at <= cutoff]
        for pid in stale:
            del self.participants[pid]
        return len(stale)

    def snapshot(self) -> RoomSnapshot:
        return RoomSnapshot(
            room_id=self.room_id,
            created_at=self.created_at,
            participants=tuple(self.participants.values()),
        )


class RoomRegistry:
    """
    Process-wide map of room id -> Room.

    All methods are synchronous and in-memory; they can be called from the
    event loop or from worker threads. The registry does not log; callers do.
    """

    def __init__(
        self,
        *,
        participant_timeout: float | timedelta = 1800,
        clock: Clock = _utc_now,
    ):
        if not isinstance(participant_timeout, timedelta):
            participant_timeout = timedelta(seconds=participant_timeout)
        if participant_timeout <= timedelta(0):
            raise ValueError("participant_timeout must be positive")
        self.participant_timeout = participant_timeout
        self._clock = clock
        self._rooms: dict[str, Room] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    # ---- internal ----

    def _get_or_create(self, room_id: str) -> tuple[Room, bool]:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is not None:
                return room, False
            room = Room(room_id=room_id, created_at=self._clock())
            self._rooms[room_id] = room
            return room, True

    def _retire(self, room: Room) -> None:
        """Drop an empty room. Caller holds room.lock."""
        room.retired = True
        with self._lock:
            if self._rooms.get(room.room_id) is room:
                del self._rooms[room.room_id]

    def _rooms_view(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    # ---- public API ----

    def join(self, room_id: str, peer_id: str, attributes: Mapping[str, Any] | None = None) -> JoinResult:
        """
        Upsert peer_id into room_id, creating the room if needed.

        A peer that is already present is replaced: its attributes and
        joined_at are refreshed and it moves to the end of the join order.
        The result lists every *other* participant in join order.
        """
        attrs = MappingProxyType(copy.deepcopy(dict(attributes or {})))

        while True:
            room, created = self._get_or_create(room_id)
            with room.lock:
                if room.retired:
                    # emptied and removed between lookup and lock; start over
                    continue
                room.upsert(PresenceRecord(peer_id=peer_id, attributes=attrs, joined_at=self._clock()))
                others = tuple(rec for pid, rec in room.participants.items() if pid != peer_id)
                return JoinResult(
                    room_id=room_id,
                    participant_count=len(room),
                    other_participants=others,
                    created=created,
                )

    def leave(self, room_id: str, peer_id: str) -> None:
        """Remove peer_id from room_id. Unknown rooms and peers are a no-op."""
        with self._lock:
            room = self._rooms.get(room_id)
        if room is None:
            return
        with room.lock:
            if room.retired:
                return
            if room.remove(peer_id) and not room:
                self._retire(room)

    def get(self, room_id: str) -> RoomSnapshot:
        with self._lock:
            room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        with room.lock:
            if room.retired or not room:
                raise RoomNotFound(room_id)
            return room.snapshot()

    def list(self) -> list[RoomSnapshot]:
        snapshots: list[RoomSnapshot] = []
        for room in self._rooms_view():
            with room.lock:
                if room.retired or not room:
                    continue
                snapshots.append(room.snapshot())
        return snapshots

    def evict_peer(self, peer_id: str) -> list[str]:
        """Remove peer_id from every room it is in; returns the affected room ids."""
        affected: list[str] = []
        for room in self._rooms_view():
            with room.lock:
                if room.retired or not room.remove(peer_id):
                    continue
                affected.append(room.room_id)
                if not room:
                    self._retire(room)
        return affected

    def sweep(self, now: datetime | None = None) -> SweepResult:
        """Evict every record whose age is >= participant_timeout."""
        cutoff = (now or self._clock()) - self.participant_timeout
        evicted = 0
        removed = 0
        for room in self._rooms_view():
            with room.lock:
                if room.retired:
                    continue
                evicted += room.expire(cutoff)
                if not room:
                    self._retire(room)
                    removed += 1
        return SweepResult(evicted_participants=evicted, removed_rooms=removed)

    def clear(self) -> None:
        with self._lock:
            rooms = list(self._rooms.values())
            self._rooms.clear()
        for room in rooms:
            with room.lock:
                room.retired = True
