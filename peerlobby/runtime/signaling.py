from __future__ import annotations

import logging

from peerlobby.runtime.presence import RoomRegistry

logger = logging.getLogger(__name__)


class PeerEvents:
    """
    Receives connect/disconnect notifications from the signaling server.

    A disconnect removes the peer from every room right away instead of
    leaving it for the TTL sweep.
    """

    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    def on_connect(self, peer_id: str) -> None:
        logger.info("Signaling client connected: %s", peer_id)

    def on_disconnect(self, peer_id: str) -> list[str]:
        rooms = self.registry.evict_peer(peer_id)
        if rooms:
            logger.info("Signaling client disconnected: %s (left rooms: %s)", peer_id, ", ".join(rooms))
        else:
            logger.info("Signaling client disconnected: %s", peer_id)
        return rooms
