from __future__ import annotations

from fastapi import APIRouter, Depends

from peerlobby.api.deps import get_peer_events
from peerlobby.runtime.signaling import PeerEvents
from peerlobby.schemas.room import PeerDisconnectOut

router = APIRouter()


@router.post("/{peer_id}/connect")
def peer_connected(peer_id: str, events: PeerEvents = Depends(get_peer_events)) -> dict:
    """Notification from the signaling server; informational only."""
    events.on_connect(peer_id)
    return {"message": "Peer connected", "peerId": peer_id}


@router.post("/{peer_id}/disconnect", response_model=PeerDisconnectOut)
def peer_disconnected(peer_id: str, events: PeerEvents = Depends(get_peer_events)) -> PeerDisconnectOut:
    """Remove the peer from every room without waiting for the TTL sweep."""
    rooms = events.on_disconnect(peer_id)
    return PeerDisconnectOut(peer_id=peer_id, rooms=rooms)
