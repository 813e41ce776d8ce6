from fastapi import Request

from peerlobby.runtime.presence import RoomRegistry
from peerlobby.runtime.signaling import PeerEvents
from peerlobby.services.room_service import RoomService


def get_registry(request: Request) -> RoomRegistry:
    return request.app.state.registry


def get_room_service(request: Request) -> RoomService:
    return RoomService(get_registry(request))


def get_peer_events(request: Request) -> PeerEvents:
    return request.app.state.peer_events
