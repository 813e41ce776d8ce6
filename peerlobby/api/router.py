from fastapi import APIRouter
from peerlobby.api import health, peers, rooms

router = APIRouter()
router.include_router(rooms.router, prefix="/api/rooms", tags=["rooms"])
router.include_router(peers.router, prefix="/api/peers", tags=["signaling"])
router.include_router(health.router, tags=["health"])
