class PresenceError(Exception):
    """Base class for presence registry errors."""


class RoomNotFound(PresenceError, KeyError):
    def __init__(self, room_id: str):
        super().__init__(room_id)
        self.room_id = room_id

    def __str__(self) -> str:
        return f"room not found: {self.room_id}"


class InvalidArgument(PresenceError, ValueError):
    """A required identifier was missing or empty."""
