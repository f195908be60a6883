"""
Room registry: which connections receive which project's broadcasts.

Each room has its own asyncio.Lock, so subscribe/leave/snapshot on one project
never waits on traffic for another project.
"""

import asyncio

from teamup.logging import get_logger

from .connection import RelayConnection

logger = get_logger("relay.registry")


class _Room:
    __slots__ = ("key", "lock", "members")

    def __init__(self, key: str):
        self.key = key
        self.lock = asyncio.Lock()
        self.members: dict[str, RelayConnection] = {}


class ConnectionRegistry:
    """
    In-memory mapping of room key to subscribed connections.

    Rooms are created on first subscribe and pruned when their last member
    leaves. Nothing survives a process restart.
    """

    def __init__(self):
        self._rooms: dict[str, _Room] = {}

    def __contains__(self, room: str) -> bool:
        return room in self._rooms

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    def rooms(self) -> list[str]:
        return list(self._rooms)

    async def add(self, room: str, connection: RelayConnection) -> bool:
        """
        Add a connection to a room.

        Returns:
            False if the connection was already a member.
        """
        while True:
            entry = self._rooms.get(room)
            if entry is None:
                entry = self._rooms.setdefault(room, _Room(room))
            async with entry.lock:
                # The room may have been pruned while we waited for its lock
                if self._rooms.get(room) is not entry:
                    continue
                if connection.id in entry.members:
                    return False
                entry.members[connection.id] = connection
                return True

    async def remove(self, room: str, connection: RelayConnection) -> bool:
        """
        Remove a connection from a room, pruning the room when it empties.

        Returns:
            False if the connection was not a member.
        """
        entry = self._rooms.get(room)
        if entry is None:
            return False
        async with entry.lock:
            removed = entry.members.pop(connection.id, None) is not None
            if not entry.members and self._rooms.get(room) is entry:
                del self._rooms[room]
                logger.debug("relay_room_pruned", room=room)
            return removed

    async def snapshot(self, room: str) -> list[RelayConnection]:
        """Connections subscribed to a room at this moment."""
        entry = self._rooms.get(room)
        if entry is None:
            return []
        async with entry.lock:
            return list(entry.members.values())

    async def members(self, room: str) -> set[str]:
        """Connection ids subscribed to a room."""
        return {conn.id for conn in await self.snapshot(room)}
