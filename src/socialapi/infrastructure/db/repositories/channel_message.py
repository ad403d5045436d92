from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from socialapi.application.exceptions import ValidationError
from socialapi.domain.entities.channel_message import ChannelMessage
from socialapi.infrastructure.db.mappers import channel_message as mapper
from socialapi.infrastructure.db.models.channel_message import ChannelMessageModel
from socialapi.infrastructure.db.repositories._errors import store_errors

# only these columns may change after creation
_MUTABLE_COLUMNS = frozenset({"body"})


class ChannelMessageRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: ChannelMessage) -> ChannelMessage:
        stmt = (
            insert(ChannelMessageModel)
            .values(**mapper.entity_to_values(message))
            .returning(ChannelMessageModel)
        )
        with store_errors("create channel_message"):
            result = await self._session.execute(stmt)
            row = result.scalar_one()
        return mapper.model_to_entity(row)

    async def fetch(self, message_id: int) -> ChannelMessage | None:
        stmt = select(ChannelMessageModel).where(ChannelMessageModel.id == message_id)
        with store_errors("fetch channel_message"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def update_partial(
        self,
        message_id: int,
        fields: dict[str, Any],
    ) -> ChannelMessage | None:
        unknown = set(fields) - _MUTABLE_COLUMNS
        if unknown:
            raise ValidationError(f"Columns are not updatable: {sorted(unknown)}")

        stmt = (
            update(ChannelMessageModel)
            .where(ChannelMessageModel.id == message_id)
            .values(**fields)
            .returning(ChannelMessageModel)
        )
        with store_errors("update channel_message"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def delete(self, message_id: int) -> bool:
        stmt = (
            delete(ChannelMessageModel)
            .where(ChannelMessageModel.id == message_id)
            .returning(ChannelMessageModel.id)
        )
        with store_errors("delete channel_message"):
            result = await self._session.execute(stmt)
            deleted = result.scalar_one_or_none()
        return deleted is not None

    async def fetch_by_ids(self, ids: Sequence[int]) -> list[ChannelMessage]:
        stmt = select(ChannelMessageModel).where(ChannelMessageModel.id.in_(ids))
        with store_errors("fetch channel_messages by ids"):
            result = await self._session.execute(stmt)
            by_id = {m.id: m for m in result.scalars().all()}
        # keep the caller's order; unknown ids are skipped
        return [mapper.model_to_entity(by_id[i]) for i in dict.fromkeys(ids) if i in by_id]
