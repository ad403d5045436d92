from __future__ import annotations

from enum import StrEnum


class ChannelMessageType(StrEnum):
    POST = "post"
    REPLY = "reply"
    JOIN = "join"
    LEAVE = "leave"
    CHAT = "chat"


class InteractionType(StrEnum):
    LIKE = "like"
