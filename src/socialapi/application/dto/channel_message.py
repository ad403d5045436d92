from __future__ import annotations

from dataclasses import dataclass, field

from socialapi.domain.entities.channel_message import ChannelMessage


@dataclass(slots=True)
class InteractionContainer:
    actors: list[int] = field(default_factory=list)
    is_interacted: bool = False


@dataclass(slots=True)
class ChannelMessageContainer:
    message: ChannelMessage
    interactions: dict[str, InteractionContainer] = field(default_factory=dict)
