from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from socialapi.domain.events.channel_message import ChannelMessageChanged


@dataclass(frozen=True, slots=True)
class OutboxRecord:
    id: int
    event_type: str
    # channel_message.id the event describes
    aggregate_id: int
    payload: dict[str, Any]
    attempts: int

    def to_event(self) -> ChannelMessageChanged:
        event = ChannelMessageChanged.from_payload(self.event_type, self.payload)
        if event.message_id != self.aggregate_id:
            raise ValueError(
                f"Outbox record {self.id} payload is for message {event.message_id}, "
                f"expected {self.aggregate_id}"
            )
        return event


class ChannelMessageOutbox(Protocol):
    async def add(self, event: ChannelMessageChanged) -> None: ...

    async def claim_due(self, batch_size: int, max_attempts: int) -> list[OutboxRecord]:
        """Lock and return up to `batch_size` records that still have attempts left."""
        ...

    async def mark_sent(self, ids: list[int]) -> None: ...

    async def mark_failed(self, record_id: int, retry_at: datetime | None) -> None:
        """Schedule a retry at `retry_at`; None gives the record up as dead."""
        ...
