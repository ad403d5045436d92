from __future__ import annotations

from typing import Protocol

from socialapi.domain.events.channel_message import ChannelMessageChanged


class EventPublisher(Protocol):
    async def publish(self, event: ChannelMessageChanged) -> None: ...
