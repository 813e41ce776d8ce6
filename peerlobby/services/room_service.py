from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from peerlobby.runtime.errors import InvalidArgument
from peerlobby.runtime.presence import PresenceRecord, RoomRegistry, RoomSnapshot
from peerlobby.schemas.room import (
    JoinRoomOut,
    ParticipantOut,
    ParticipantSummaryOut,
    RoomListOut,
    RoomOut,
    RoomSummaryOut,
)

logger = logging.getLogger(__name__)

# keys owned by the record itself; an attribute can't shadow them
_RESERVED_KEYS = frozenset({"peerId", "peer_id", "joinedAt", "joined_at"})


def _require(value: str | None, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{field} is required")
    return value


def participant_out(record: PresenceRecord) -> ParticipantOut:
    extra = {k: v for k, v in record.attributes.items() if k not in _RESERVED_KEYS}
    return ParticipantOut(peer_id=record.peer_id, joined_at=record.joined_at, **extra)


def participant_summary_out(record: PresenceRecord) -> ParticipantSummaryOut:
    return ParticipantSummaryOut(
        peer_id=record.peer_id,
        user_role=record.attributes.get("role"),
        user_name=record.attributes.get("name"),
        joined_at=record.joined_at,
    )


def room_out(snapshot: RoomSnapshot) -> RoomOut:
    return RoomOut(
        room_id=snapshot.room_id,
        participants=[participant_out(p) for p in snapshot.participants],
        participant_count=snapshot.participant_count,
        created_at=snapshot.created_at,
    )


def room_summary_out(snapshot: RoomSnapshot) -> RoomSummaryOut:
    return RoomSummaryOut(
        room_id=snapshot.room_id,
        participant_count=snapshot.participant_count,
        created_at=snapshot.created_at,
        participants=[participant_summary_out(p) for p in snapshot.participants],
    )


class RoomService:
    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    def join_room(self, room_id: str, *, peer_id: str | None, user_info: Mapping[str, Any] | None = None) -> JoinRoomOut:
        room_id = _require(room_id, "roomId")
        peer_id = _require(peer_id, "peerId")

        logger.info("%s joining room %s", peer_id, room_id)
        result = self.registry.join(room_id, peer_id, user_info or {})
        if result.created:
            logger.info("Room %s created", room_id)

        return JoinRoomOut(
            room_id=result.room_id,
            participant_count=result.participant_count,
            other_participants=[participant_out(p) for p in result.other_participants],
        )

    def leave_room(self, room_id: str, *, peer_id: str | None) -> None:
        room_id = _require(room_id, "roomId")
        peer_id = _require(peer_id, "peerId")

        logger.info("%s leaving room %s", peer_id, room_id)
        existed = room_id in self.registry
        self.registry.leave(room_id, peer_id)
        if existed and room_id not in self.registry:
            logger.info("Room %s is empty, removed", room_id)

    def get_room(self, room_id: str) -> RoomOut:
        """Raises RoomNotFound for an unknown room."""
        return room_out(self.registry.get(room_id))

    def list_rooms(self) -> RoomListOut:
        rooms = [room_summary_out(s) for s in self.registry.list()]
        return RoomListOut(total_rooms=len(rooms), rooms=rooms)
