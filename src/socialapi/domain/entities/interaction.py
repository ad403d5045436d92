from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from socialapi.domain.value_objects.enums import InteractionType


@dataclass(frozen=True, slots=True)
class Interaction:
    id: int
    message_id: int
    account_id: int
    type_constant: InteractionType
    created_at: datetime
