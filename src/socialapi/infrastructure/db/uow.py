from __future__ import annotations

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from socialapi.domain.entities.channel_message import ChannelMessage
from socialapi.domain.events.channel_message import ChannelMessageChanged, LifecycleAction
from socialapi.infrastructure.db.repositories._errors import store_errors
from socialapi.infrastructure.db.repositories.channel_message import ChannelMessageRepo
from socialapi.infrastructure.db.repositories.interaction import InteractionReaderRepo
from socialapi.infrastructure.db.repositories.outbox import ChannelMessageOutboxRepo


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession.

    The after_* hooks record lifecycle events in the outbox so they commit
    atomically with the write that caused them.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.channel_messages = ChannelMessageRepo(session)
        self.interactions = InteractionReaderRepo(session)
        self.outbox = ChannelMessageOutboxRepo(session)

    async def after_create(self, message: ChannelMessage) -> None:
        await self._record("created", message)

    async def after_update(self, message: ChannelMessage) -> None:
        await self._record("updated", message)

    async def after_delete(self, message: ChannelMessage) -> None:
        await self._record("deleted", message)

    async def _record(self, action: LifecycleAction, message: ChannelMessage) -> None:
        await self.outbox.add(ChannelMessageChanged.from_entity(action, message))

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        with store_errors("commit"):
            await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
