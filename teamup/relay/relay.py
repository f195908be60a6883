"""
Realtime broadcast relay.

Fans persisted chat messages out to every connection subscribed to the
message's project room. Delivery is best-effort and at-most-once: there is no
backlog for late subscribers and no redelivery after a failed send.

Usage:
    relay = BroadcastRelay.from_settings(get_settings())

    connection = relay.open_connection(websocket)
    sender = asyncio.create_task(relay.pump(connection))
    await relay.subscribe(connection, project_id)
    ...
    await relay.broadcast(project_id, message.to_dict())
    await relay.disconnect(connection)
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Optional

from teamup.exceptions import ConnectionStateError, DeliveryFailure, TeamUpError, ValidationError
from teamup.logging import get_logger

from .connection import ConnectionState, RelayConnection, Transport
from .protocol import (
    JoinProjectFrame,
    ProjectId,
    SendMessageFrame,
    error_frame,
    joined_frame,
    new_message_frame,
    parse_client_frame,
    room_key,
)
from .registry import ConnectionRegistry

if TYPE_CHECKING:
    from teamup.config import Settings

    from .bridge import RedisRelayBridge

logger = get_logger("relay")

# Persists a send_message frame and returns the stored message payload
SendMessageHandler = Callable[[SendMessageFrame], Awaitable[dict]]


class BroadcastRelay:
    """
    Connection hub owning the room registry.

    Broadcasting only queues frames on each subscriber's buffer, so a slow
    client never stalls the broadcaster or other subscribers. Each connection's
    buffer is drained by pump(); a send that fails or exceeds send_timeout
    disconnects that connection only.
    """

    def __init__(
        self,
        registry: ConnectionRegistry | None = None,
        buffer_size: int = 100,
        send_timeout: float = 5.0,
    ):
        self.registry = registry or ConnectionRegistry()
        self.buffer_size = buffer_size
        self.send_timeout = send_timeout
        self.bridge: Optional["RedisRelayBridge"] = None
        self._connections: dict[str, RelayConnection] = {}

    @classmethod
    def from_settings(cls, settings: "Settings") -> "BroadcastRelay":
        return cls(
            buffer_size=settings.relay_buffer_size,
            send_timeout=settings.relay_send_timeout_seconds,
        )

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def attach_bridge(self, bridge: "RedisRelayBridge") -> None:
        """Route publish() through a cross-process bridge."""
        self.bridge = bridge

    # =========================================================================
    # Connection lifecycle
    # =========================================================================

    def open_connection(self, transport: Transport, connection_id: str | None = None) -> RelayConnection:
        connection = RelayConnection(
            transport, buffer_size=self.buffer_size, connection_id=connection_id
        )
        self._connections[connection.id] = connection
        logger.info("relay_connected", connection_id=connection.id)
        return connection

    async def subscribe(self, connection: RelayConnection, project_id: ProjectId) -> bool:
        """
        Subscribe a connection to a project's room.

        Idempotent: a second subscribe to the same room changes nothing and
        returns False.

        Raises:
            ValidationError: project_id is missing or blank.
            ConnectionStateError: The connection is already disconnected.
        """
        room = room_key(project_id)
        if not connection.is_open:
            raise ConnectionStateError(f"Connection {connection.id} is disconnected")

        added = await self.registry.add(room, connection)
        if not connection.is_open:
            # Disconnected while waiting for the room lock
            await self.registry.remove(room, connection)
            return False
        if added:
            connection.rooms.add(room)
            connection.transition(ConnectionState.SUBSCRIBED)
            logger.info("relay_subscribed", connection_id=connection.id, project_id=room)
        return added

    async def disconnect(self, connection: RelayConnection) -> bool:
        """
        Close a connection and remove it from every room. Idempotent.

        Returns:
            False if it was already disconnected.
        """
        if not connection.close():
            return False
        rooms = list(connection.rooms)
        for room in rooms:
            await self.registry.remove(room, connection)
        connection.rooms.clear()
        self._connections.pop(connection.id, None)
        logger.info("relay_disconnected", connection_id=connection.id, rooms=len(rooms))
        return True

    # =========================================================================
    # Fan-out
    # =========================================================================

    async def broadcast(self, project_id: ProjectId, message: dict) -> int:
        """
        Queue a new_message frame for every current subscriber of a project.

        Returns:
            Number of subscribers the frame was queued for.
        """
        room = room_key(project_id)
        frame = new_message_frame(message)
        subscribers = await self.registry.snapshot(room)

        delivered = 0
        for connection in subscribers:
            if connection.enqueue(frame):
                delivered += 1

        logger.info(
            "relay_broadcast",
            project_id=room,
            subscribers=len(subscribers),
            delivered=delivered,
        )
        return delivered

    async def publish(self, project_id: ProjectId, message: dict) -> None:
        """
        Hand a persisted message to the relay.

        With a bridge attached the message goes through Redis and every
        process (this one included) broadcasts it on receipt. If the bridge
        fails, this process still broadcasts locally.
        """
        if self.bridge is not None and self.bridge.is_available:
            try:
                await self.bridge.publish(project_id, message)
                return
            except Exception as exc:
                logger.warning(
                    "relay_bridge_publish_failed",
                    project_id=str(project_id),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
        await self.broadcast(project_id, message)

    # =========================================================================
    # Delivery
    # =========================================================================

    async def flush(self, connection: RelayConnection) -> int:
        """
        Send every frame currently queued for a connection, oldest first.

        A failed or timed-out send is a DeliveryFailure: logged, and the
        connection is disconnected. It is never raised.

        Returns:
            Number of frames sent.
        """
        sent = 0
        for frame in connection.take_pending():
            if not connection.is_open:
                break
            try:
                await asyncio.wait_for(
                    connection.transport.send_json(frame), timeout=self.send_timeout
                )
            except Exception as exc:
                failure = DeliveryFailure(connection.id, str(exc) or type(exc).__name__)
                logger.warning(
                    "delivery_failed",
                    connection_id=failure.connection_id,
                    error=failure.reason,
                    error_type=type(exc).__name__,
                )
                await self.disconnect(connection)
                break
            sent += 1
        return sent

    async def pump(self, connection: RelayConnection) -> None:
        """Deliver queued frames until the connection is disconnected."""
        while await connection.wait_pending():
            await self.flush(connection)

    # =========================================================================
    # Client frames
    # =========================================================================

    async def handle_client_message(
        self,
        connection: RelayConnection,
        raw: str | bytes | dict[str, Any],
        on_send_message: SendMessageHandler | None = None,
    ) -> None:
        """
        Act on one frame received from a client.

        join_project subscribes and acknowledges. send_message is passed to
        on_send_message for persistence, then published. Problems are answered
        with an error frame; the connection stays open.
        """
        try:
            frame = parse_client_frame(raw)
        except ValidationError as exc:
            logger.info("relay_invalid_frame", connection_id=connection.id, detail=exc.detail)
            connection.enqueue(error_frame(exc.detail))
            return

        if isinstance(frame, JoinProjectFrame):
            await self.subscribe(connection, frame.project_id)
            connection.enqueue(joined_frame(frame.project_id))
            return

        if on_send_message is None:
            connection.enqueue(error_frame("send_message is not supported on this connection"))
            return

        try:
            message = await on_send_message(frame)
        except TeamUpError as exc:
            logger.info(
                "relay_send_rejected",
                connection_id=connection.id,
                project_id=frame.project_id,
                detail=exc.detail,
            )
            connection.enqueue(error_frame(exc.detail))
            return

        await self.publish(frame.project_id, message)
