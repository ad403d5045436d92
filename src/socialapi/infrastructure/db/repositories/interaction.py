from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from socialapi.domain.value_objects.enums import InteractionType
from socialapi.infrastructure.db.models.interaction import InteractionModel
from socialapi.infrastructure.db.repositories._errors import store_errors


class InteractionReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_actors(self, message_id: int, kind: InteractionType) -> list[int]:
        stmt = (
            select(InteractionModel.account_id)
            .where(
                InteractionModel.message_id == message_id,
                InteractionModel.type_constant == kind.value,
            )
            .order_by(InteractionModel.created_at.asc(), InteractionModel.id.asc())
        )
        with store_errors("list interactions"):
            result = await self._session.execute(stmt)
            return list(result.scalars().all())
