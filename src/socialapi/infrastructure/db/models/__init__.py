"""Importing this package registers every table on Base.metadata."""
from socialapi.infrastructure.db.models.channel_message import ChannelMessageModel
from socialapi.infrastructure.db.models.interaction import InteractionModel
from socialapi.infrastructure.db.models.outbox import OutboxEventModel

__all__ = [
    "ChannelMessageModel",
    "InteractionModel",
    "OutboxEventModel",
]
