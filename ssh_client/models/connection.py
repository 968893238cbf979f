"""Connection lifecycle model."""

from enum import Enum


class ConnectionState(Enum):
    """Lifecycle of the single connection owned by a client."""

    UNSTARTED = "unstarted"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"
