from __future__ import annotations

import json

from socialapi.domain.events.channel_message import ChannelMessageChanged


def serialize_event(event: ChannelMessageChanged) -> str:
    envelope = {
        "event": event.event_type,
        "message_id": event.message_id,
        "channel_id": event.initial_channel_id,
        "data": event.payload(),
    }
    return json.dumps(envelope)


def deserialize_event(raw: str | bytes) -> ChannelMessageChanged:
    envelope = json.loads(raw)
    return ChannelMessageChanged.from_payload(envelope["event"], envelope["data"])
