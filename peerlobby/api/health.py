from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from peerlobby.api.deps import get_registry
from peerlobby.runtime.presence import RoomRegistry
from peerlobby.schemas.room import HealthOut

router = APIRouter()


@router.get("/health", response_model=HealthOut)
def health(request: Request, registry: RoomRegistry = Depends(get_registry)) -> HealthOut:
    settings = request.app.state.settings
    return HealthOut(
        timestamp=datetime.now(timezone.utc),
        rooms=len(registry),
        environment="production" if settings.is_production else "development",
    )
