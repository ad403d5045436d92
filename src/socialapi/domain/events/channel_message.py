from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, get_args

from socialapi.domain.entities.channel_message import ChannelMessage

TABLE_NAME = "channel_message"

LifecycleAction = Literal["created", "updated", "deleted"]


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@dataclass(frozen=True, slots=True)
class ChannelMessageChanged:
    action: LifecycleAction
    message_id: int
    body: str
    type: str
    account_id: int
    initial_channel_id: int
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, action: LifecycleAction, message: ChannelMessage) -> ChannelMessageChanged:
        return cls(
            action=action,
            message_id=message.id,
            body=message.body,
            type=str(message.type),
            account_id=message.account_id,
            initial_channel_id=message.initial_channel_id,
            created_at=message.created_at,
            updated_at=message.updated_at,
        )

    @classmethod
    def from_payload(cls, event_type: str, payload: dict[str, Any]) -> ChannelMessageChanged:
        """Rebuild an event stored by `payload()`.

        Raises ValueError when `event_type` is not a channel message lifecycle event.
        """
        prefix, _, action = event_type.rpartition("_")
        if prefix != TABLE_NAME or action not in get_args(LifecycleAction):
            raise ValueError(f"Not a channel message event: {event_type!r}")
        return cls(
            action=action,  # type: ignore[arg-type]
            message_id=payload["id"],
            body=payload["body"],
            type=payload["type"],
            account_id=payload["account_id"],
            initial_channel_id=payload["initial_channel_id"],
            created_at=_parse_ts(payload.get("created_at")),
            updated_at=_parse_ts(payload.get("updated_at")),
        )

    @property
    def event_type(self) -> str:
        return f"{TABLE_NAME}_{self.action}"

    def payload(self) -> dict[str, Any]:
        return {
            "id": self.message_id,
            "body": self.body,
            "type": self.type,
            "account_id": self.account_id,
            "initial_channel_id": self.initial_channel_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
