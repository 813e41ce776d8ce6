from __future__ import annotations

from fastapi import APIRouter, Depends

from peerlobby.api.deps import get_room_service
from peerlobby.schemas.room import (
    ErrorOut,
    JoinRoomIn,
    JoinRoomOut,
    LeaveRoomIn,
    LeaveRoomOut,
    RoomListOut,
    RoomOut,
)
from peerlobby.services.room_service import RoomService

router = APIRouter()


@router.get("", response_model=RoomListOut)
def list_rooms(svc: RoomService = Depends(get_room_service)) -> RoomListOut:
    return svc.list_rooms()


@router.post("/{room_id}/join", response_model=JoinRoomOut, responses={400: {"model": ErrorOut}})
def join_room(
    room_id: str,
    body: JoinRoomIn,
    svc: RoomService = Depends(get_room_service),
) -> JoinRoomOut:
    return svc.join_room(room_id, peer_id=body.peer_id, user_info=body.user_info)


@router.get("/{room_id}", response_model=RoomOut, responses={404: {"model": ErrorOut}})
def get_room(room_id: str, svc: RoomService = Depends(get_room_service)) -> RoomOut:
    return svc.get_room(room_id)


@router.post("/{room_id}/leave", response_model=LeaveRoomOut, responses={400: {"model": ErrorOut}})
def leave_room(
    room_id: str,
    body: LeaveRoomIn | None = None,
    svc: RoomService = Depends(get_room_service),
) -> LeaveRoomOut:
    svc.leave_room(room_id, peer_id=body.peer_id if body else None)
    return LeaveRoomOut()
