from __future__ import annotations

from collections.abc import Sequence

from socialapi.application.dto.channel_message import (
    ChannelMessageContainer,
    InteractionContainer,
)
from socialapi.application.exceptions import NotFoundError, ValidationError
from socialapi.application.uow import UnitOfWork
from socialapi.domain.entities.channel_message import ChannelMessage
from socialapi.domain.value_objects.enums import InteractionType


async def create(message: ChannelMessage, uow: UnitOfWork) -> ChannelMessage:
    """Persist a new message.

    The returned entity carries the id and timestamps assigned by the store.
    """
    created = await uow.channel_messages.create(message)
    await uow.after_create(created)
    await uow.commit()
    return created


async def fetch(message_id: int, uow: UnitOfWork) -> ChannelMessage:
    message = await uow.channel_messages.fetch(message_id)
    if message is None:
        raise NotFoundError("Channel message not found")
    return message


async def update(message: ChannelMessage, uow: UnitOfWork) -> ChannelMessage:
    """Persist the body of `message`.

    Type, author and origin channel are fixed at creation, so any in-memory
    change to them is ignored here.
    """
    updated = await uow.channel_messages.update_partial(
        message.id, {"body": message.body},
    )
    if updated is None:
        raise NotFoundError("Channel message not found")
    await uow.after_update(updated)
    await uow.commit()
    return updated


async def delete(message_id: int, uow: UnitOfWork) -> None:
    message = await uow.channel_messages.fetch(message_id)
    if message is None:
        raise NotFoundError("Channel message not found")
    if not await uow.channel_messages.delete(message_id):
        raise NotFoundError("Channel message not found")
    await uow.after_delete(message)
    await uow.commit()


async def fetch_by_ids(ids: Sequence[int], uow: UnitOfWork) -> list[ChannelMessage]:
    if not ids:
        return []
    return await uow.channel_messages.fetch_by_ids(ids)


async def fetch_relatives(
    message: ChannelMessage,
    uow: UnitOfWork,
) -> ChannelMessageContainer:
    if not message.is_persisted:
        raise ValidationError("Channel message id is not set")

    actors = await uow.interactions.list_actors(message.id, InteractionType.LIKE)

    # not computed per viewer: any successful lookup counts as interacted
    likes = InteractionContainer(actors=actors, is_interacted=True)

    return ChannelMessageContainer(
        message=message,
        interactions={InteractionType.LIKE.value: likes},
    )
