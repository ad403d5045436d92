"""Redis Pub/Sub publisher for channel message lifecycle events."""
from __future__ import annotations

import logging

import redis.asyncio as aioredis

from socialapi.domain.events.channel_message import ChannelMessageChanged
from socialapi.infrastructure.bus.serializer import serialize_event

logger = logging.getLogger(__name__)


def channel_topic(prefix: str, channel_id: int) -> str:
    """Topic carrying the events of messages that originated in `channel_id`."""
    return f"{prefix}.channel.{channel_id}"


class RedisEventPublisher:
    """Implements application.ports.bus.EventPublisher."""

    def __init__(self, redis: aioredis.Redis, prefix: str) -> None:
        self._redis = redis
        self._prefix = prefix

    async def publish(self, event: ChannelMessageChanged) -> None:
        topic = channel_topic(self._prefix, event.initial_channel_id)
        receivers = await self._redis.publish(topic, serialize_event(event))
        logger.debug(
            "Published %s for message %d to %s (%d receivers)",
            event.event_type,
            event.message_id,
            topic,
            receivers,
        )
