from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from socialapi.domain.value_objects.enums import ChannelMessageType


class CreateChannelMessageRequest(BaseModel):
    body: str
    type: ChannelMessageType
    account_id: int = Field(gt=0)
    initial_channel_id: int = Field(gt=0)


class UpdateChannelMessageRequest(BaseModel):
    body: str


class ChannelMessageResponse(BaseModel):
    id: int
    body: str
    type: ChannelMessageType
    account_id: int
    initial_channel_id: int
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class InteractionContainerResponse(BaseModel):
    actors: list[int]
    is_interacted: bool

    model_config = ConfigDict(from_attributes=True)


class ChannelMessageContainerResponse(BaseModel):
    message: ChannelMessageResponse
    interactions: dict[str, InteractionContainerResponse]

    model_config = ConfigDict(from_attributes=True)
