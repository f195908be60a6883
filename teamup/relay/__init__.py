"""
Realtime broadcast relay for project chat.

Usage:
    from teamup.relay import BroadcastRelay

    relay = BroadcastRelay()
    connection = relay.open_connection(transport)
    await relay.subscribe(connection, project_id)
    await relay.broadcast(project_id, message)
"""

from .bridge import RedisRelayBridge
from .connection import ConnectionState, RelayConnection, Transport
from .protocol import (
    JoinProjectFrame,
    SendMessageFrame,
    error_frame,
    joined_frame,
    new_message_frame,
    parse_client_frame,
    room_key,
)
from .registry import ConnectionRegistry
from .relay import BroadcastRelay

__all__ = [
    "BroadcastRelay",
    "ConnectionRegistry",
    "ConnectionState",
    "JoinProjectFrame",
    "RedisRelayBridge",
    "RelayConnection",
    "SendMessageFrame",
    "Transport",
    "error_frame",
    "joined_frame",
    "new_message_frame",
    "parse_client_frame",
    "room_key",
]
