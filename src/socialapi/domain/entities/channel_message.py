from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from socialapi.domain.value_objects.enums import ChannelMessageType


@dataclass(slots=True)
class ChannelMessage:
    body: str
    type: ChannelMessageType
    account_id: int
    initial_channel_id: int
    # 0 until the store assigns one
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id != 0
