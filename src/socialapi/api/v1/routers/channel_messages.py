from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from socialapi.api.deps import UoWDep
from socialapi.api.v1.schemas.channel_message import (
    ChannelMessageContainerResponse,
    ChannelMessageResponse,
    CreateChannelMessageRequest,
    UpdateChannelMessageRequest,
)
from socialapi.domain.entities.channel_message import ChannelMessage
from socialapi.services import channel_message_service

router = APIRouter(prefix="/api/v1/channel-messages", tags=["channel-messages"])


@router.post("", response_model=ChannelMessageResponse, status_code=201)
async def create_message(body: CreateChannelMessageRequest, uow: UoWDep) -> ChannelMessageResponse:
    message = ChannelMessage(
        body=body.body,
        type=body.type,
        account_id=body.account_id,
        initial_channel_id=body.initial_channel_id,
    )
    created = await channel_message_service.create(message, uow)
    return ChannelMessageResponse.model_validate(created)


@router.get("", response_model=list[ChannelMessageResponse])
async def fetch_by_ids(
    uow: UoWDep,
    ids: list[int] = Query([]),
) -> list[ChannelMessageResponse]:
    messages = await channel_message_service.fetch_by_ids(ids, uow)
    return [ChannelMessageResponse.model_validate(m) for m in messages]


@router.get("/{message_id}", response_model=ChannelMessageResponse)
async def get_message(message_id: int, uow: UoWDep) -> ChannelMessageResponse:
    message = await channel_message_service.fetch(message_id, uow)
    return ChannelMessageResponse.model_validate(message)


@router.patch("/{message_id}", response_model=ChannelMessageResponse)
async def update_message(
    message_id: int,
    body: UpdateChannelMessageRequest,
    uow: UoWDep,
) -> ChannelMessageResponse:
    message = await channel_message_service.fetch(message_id, uow)
    message.body = body.body
    updated = await channel_message_service.update(message, uow)
    return ChannelMessageResponse.model_validate(updated)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(message_id: int, uow: UoWDep) -> Response:
    await channel_message_service.delete(message_id, uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{message_id}/relatives", response_model=ChannelMessageContainerResponse)
async def get_relatives(message_id: int, uow: UoWDep) -> ChannelMessageContainerResponse:
    message = await channel_message_service.fetch(message_id, uow)
    container = await channel_message_service.fetch_relatives(message, uow)
    return ChannelMessageContainerResponse.model_validate(container)
