from __future__ import annotations

from typing import Protocol

from socialapi.domain.value_objects.enums import InteractionType


class InteractionReader(Protocol):
    async def list_actors(self, message_id: int, kind: InteractionType) -> list[int]:
        """Account ids that performed `kind` on the message, oldest first."""
        ...
