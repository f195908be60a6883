"""
Redis pub/sub bridge for the broadcast relay.

Lets several API processes share project rooms: publish() sends the message to
a Redis channel per project, and every process's listener broadcasts what it
receives to its local subscribers. Degrades to local-only delivery when Redis
is unreachable.
"""

import asyncio
import json
from typing import TYPE_CHECKING, Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from teamup.logging import get_logger

from .protocol import ProjectId, room_key

if TYPE_CHECKING:
    from teamup.config import Settings

    from .relay import BroadcastRelay

logger = get_logger("relay.bridge")


class RedisRelayBridge:
    """
    Cross-process fan-out through Redis pub/sub.

    Usage:
        bridge = RedisRelayBridge.from_settings(relay, settings)
        if await bridge.start():
            relay.attach_bridge(bridge)
        ...
        await bridge.stop()
    """

    def __init__(
        self,
        relay: "BroadcastRelay",
        redis_url: str,
        channel_prefix: str = "teamup:relay",
        client: Optional[Any] = None,
    ):
        self.relay = relay
        self.redis_url = redis_url
        self.channel_prefix = channel_prefix
        self._client = client
        self._pubsub: Optional[Any] = None
        self._listener: Optional[asyncio.Task] = None
        self._available = False

    @classmethod
    def from_settings(cls, relay: "BroadcastRelay", settings: "Settings") -> "RedisRelayBridge":
        return cls(
            relay,
            redis_url=settings.redis_url,
            channel_prefix=settings.relay_redis_channel_prefix,
        )

    @property
    def is_available(self) -> bool:
        return self._available

    def channel_for(self, project_id: ProjectId) -> str:
        return f"{self.channel_prefix}:{room_key(project_id)}"

    def room_from_channel(self, channel: str | bytes) -> str | None:
        if isinstance(channel, bytes):
            channel = channel.decode("utf-8")
        prefix = f"{self.channel_prefix}:"
        if not channel.startswith(prefix):
            return None
        return channel[len(prefix):] or None

    async def start(self) -> bool:
        """
        Connect, subscribe to every project channel and start listening.

        Returns:
            True if Redis is available, False otherwise.
        """
        try:
            if self._client is None:
                self._client = aioredis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    socket_timeout=5,
                    socket_connect_timeout=5,
                )
            await self._client.ping()
            self._pubsub = self._client.pubsub()
            await self._pubsub.psubscribe(f"{self.channel_prefix}:*")
        except (RedisError, OSError) as e:
            logger.warning("relay_bridge_unavailable", error=str(e))
            self._available = False
            return False

        self._listener = asyncio.create_task(self._listen())
        self._available = True
        logger.info("relay_bridge_started", channel_prefix=self.channel_prefix)
        return True

    async def stop(self) -> None:
        self._available = False
        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            self._listener = None
        if self._pubsub is not None:
            await self._pubsub.punsubscribe()
            await self._pubsub.aclose()
            self._pubsub = None
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.info("relay_bridge_stopped")

    async def publish(self, project_id: ProjectId, message: dict) -> int:
        """
        Publish a message to its project channel.

        Returns:
            Number of Redis subscribers (processes) that received it.
        """
        payload = json.dumps(message, default=str)
        return await self._client.publish(self.channel_for(project_id), payload)

    async def handle_pubsub_message(self, channel: str | bytes, data: str | bytes) -> int:
        """Broadcast one pub/sub message to local subscribers."""
        room = self.room_from_channel(channel)
        if room is None:
            logger.debug("relay_bridge_foreign_channel", channel=str(channel))
            return 0
        try:
            message = json.loads(data)
        except (TypeError, ValueError) as e:
            logger.warning("relay_bridge_bad_payload", channel=str(channel), error=str(e))
            return 0
        return await self.relay.broadcast(room, message)

    async def _listen(self) -> None:
        try:
            async for item in self._pubsub.listen():
                if item.get("type") != "pmessage":
                    continue
                await self.handle_pubsub_message(item["channel"], item["data"])
        except (RedisError, OSError) as e:
            # Local broadcasting takes over in publish()
            self._available = False
            logger.error("relay_bridge_listener_failed", error=str(e))
