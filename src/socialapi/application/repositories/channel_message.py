from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from socialapi.domain.entities.channel_message import ChannelMessage


class ChannelMessageRepository(Protocol):
    async def create(self, message: ChannelMessage) -> ChannelMessage:
        """Insert message. Returns it with id and timestamps assigned by the store."""
        ...

    async def fetch(self, message_id: int) -> ChannelMessage | None: ...

    async def update_partial(
        self,
        message_id: int,
        fields: dict[str, Any],
    ) -> ChannelMessage | None:
        """Write only `fields`. Returns the stored row, or None if it does not exist."""
        ...

    async def delete(self, message_id: int) -> bool: ...

    async def fetch_by_ids(self, ids: Sequence[int]) -> list[ChannelMessage]: ...
