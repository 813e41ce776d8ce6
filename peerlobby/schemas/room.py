from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- client -> server ----

class JoinRoomIn(CamelModel):
    peer_id: Optional[str] = None
    user_info: Optional[dict[str, Any]] = None


class LeaveRoomIn(CamelModel):
    peer_id: Optional[str] = None


# ---- server -> client ----

class ParticipantOut(CamelModel):
    """A participant with its attributes flattened next to peerId/joinedAt."""
    model_config = ConfigDict(extra="allow")

    peer_id: str
    joined_at: datetime


class ParticipantSummaryOut(CamelModel):
    peer_id: str
    user_role: Optional[Any] = None
    user_name: Optional[Any] = None
    joined_at: datetime


class JoinRoomOut(CamelModel):
    message: str = "Joined room successfully"
    room_id: str
    participant_count: int
    other_participants: List[ParticipantOut] = []


class LeaveRoomOut(CamelModel):
    message: str = "Left room successfully"


class RoomOut(CamelModel):
    room_id: str
    participants: List[ParticipantOut] = []
    participant_count: int
    created_at: datetime


class RoomSummaryOut(CamelModel):
    room_id: str
    participant_count: int
    created_at: datetime
    participants: List[ParticipantSummaryOut] = []


class RoomListOut(CamelModel):
    total_rooms: int
    rooms: List[RoomSummaryOut]


class PeerDisconnectOut(CamelModel):
    message: str = "Peer disconnected"
    peer_id: str
    rooms: List[str] = []


class HealthOut(BaseModel):
    status: str = "healthy"
    timestamp: datetime
    rooms: int
    environment: str


class ErrorOut(BaseModel):
    error: str
