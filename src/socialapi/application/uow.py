from __future__ import annotations

from typing import Protocol

from socialapi.application.repositories.channel_message import ChannelMessageRepository
from socialapi.application.repositories.interaction import InteractionReader
from socialapi.application.repositories.outbox import ChannelMessageOutbox
from socialapi.domain.entities.channel_message import ChannelMessage


class UnitOfWork(Protocol):
    channel_messages: ChannelMessageRepository
    interactions: InteractionReader
    outbox: ChannelMessageOutbox

    async def after_create(self, message: ChannelMessage) -> None: ...
    async def after_update(self, message: ChannelMessage) -> None: ...
    async def after_delete(self, message: ChannelMessage) -> None: ...

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
