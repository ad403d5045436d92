from __future__ import annotations

from socialapi.domain.entities.channel_message import ChannelMessage
from socialapi.domain.value_objects.enums import ChannelMessageType
from socialapi.infrastructure.db.models.channel_message import ChannelMessageModel


def model_to_entity(model: ChannelMessageModel) -> ChannelMessage:
    return ChannelMessage(
        id=model.id,
        body=model.body,
        type=ChannelMessageType(model.type),
        account_id=model.account_id,
        initial_channel_id=model.initial_channel_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_values(entity: ChannelMessage) -> dict[str, object]:
    """Insertable columns; id and timestamps are left to the database."""
    return {
        "body": entity.body,
        "type": ChannelMessageType(entity.type).value,
        "account_id": entity.account_id,
        "initial_channel_id": entity.initial_channel_id,
    }
