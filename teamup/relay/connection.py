r"""
Relay connection lifecycle.

A connection is a small state machine:

    connected --subscribe--> subscribed --subscribe--> subscribed
        \                        |
         +------disconnect-------+--> disconnected (terminal)

Outgoing frames wait in a bounded buffer drained by one sender, so each
subscriber sees frames in the order they were queued.
"""

import asyncio
import uuid
from collections import deque
from enum import Enum
from typing import Any, Protocol

from teamup.exceptions import ConnectionStateError
from teamup.logging import get_logger

logger = get_logger("relay.connection")


class ConnectionState(str, Enum):
    CONNECTED = "connected"
    SUBSCRIBED = "subscribed"
    DISCONNECTED = "disconnected"


_TRANSITIONS: dict[ConnectionState, frozenset[ConnectionState]] = {
    ConnectionState.CONNECTED: frozenset({ConnectionState.SUBSCRIBED, ConnectionState.DISCONNECTED}),
    ConnectionState.SUBSCRIBED: frozenset({ConnectionState.SUBSCRIBED, ConnectionState.DISCONNECTED}),
    ConnectionState.DISCONNECTED: frozenset(),
}


class Transport(Protocol):
    """Anything that can push a JSON frame to one client (a WebSocket, a test fake)."""

    async def send_json(self, data: Any) -> None: ...


class RelayConnection:
    """
    One client connection as seen by the relay.

    Attributes:
        id: Short opaque identifier used in logs and registry keys.
        rooms: Room keys this connection is subscribed to.
        dropped: Frames discarded because the buffer was full.
    """

    def __init__(self, transport: Transport, buffer_size: int = 100, connection_id: str | None = None):
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        self.id = connection_id or uuid.uuid4().hex[:12]
        self.transport = transport
        self.buffer_size = buffer_size
        self.state = ConnectionState.CONNECTED
        self.rooms: set[str] = set()
        self.dropped = 0
        self._outbox: deque[dict] = deque()
        self._ready = asyncio.Event()

    def __repr__(self) -> str:
        return f"<RelayConnection {self.id} {self.state.value} rooms={sorted(self.rooms)}>"

    @property
    def is_open(self) -> bool:
        return self.state is not ConnectionState.DISCONNECTED

    @property
    def pending_count(self) -> int:
        return len(self._outbox)

    def transition(self, new_state: ConnectionState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise ConnectionStateError(
                f"Connection {self.id} cannot move from {self.state.value} to {new_state.value}"
            )
        self.state = new_state

    def enqueue(self, frame: dict) -> bool:
        """
        Queue a frame for delivery without blocking.

        When the buffer is full the oldest queued frame is dropped.

        Returns:
            False if the connection is already disconnected.
        """
        if not self.is_open:
            return False
        if len(self._outbox) >= self.buffer_size:
            self._outbox.popleft()
            self.dropped += 1
            logger.warning(
                "relay_buffer_overflow",
                connection_id=self.id,
                buffer_size=self.buffer_size,
                dropped=self.dropped,
            )
        self._outbox.append(frame)
        self._ready.set()
        return True

    def take_pending(self) -> list[dict]:
        """Remove and return every queued frame, oldest first."""
        pending = list(self._outbox)
        self._outbox.clear()
        self._ready.clear()
        return pending

    async def wait_pending(self) -> bool:
        """
        Wait until a frame is queued or the connection closes.

        Returns:
            True when frames are ready, False once disconnected.
        """
        while not self._outbox and self.is_open:
            self._ready.clear()
            await self._ready.wait()
        return self.is_open

    def close(self) -> bool:
        """
        Enter the terminal state and discard undelivered frames.

        Returns:
            False if the connection was already closed.
        """
        if not self.is_open:
            return False
        self.transition(ConnectionState.DISCONNECTED)
        self._outbox.clear()
        # Wake the sender so it can observe the closed state
        self._ready.set()
        return True
