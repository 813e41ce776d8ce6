from peerlobby.core.config import Settings, settings
from peerlobby.core.logging import setup_logging

__all__ = ["Settings", "settings", "setup_logging"]
