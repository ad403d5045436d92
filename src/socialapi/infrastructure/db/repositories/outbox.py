from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from socialapi.application.repositories.outbox import OutboxRecord
from socialapi.domain.events.channel_message import ChannelMessageChanged
from socialapi.infrastructure.db.models.outbox import OutboxEventModel
from socialapi.infrastructure.db.repositories._errors import store_errors

_RETRYABLE = ("pending", "failed")


class ChannelMessageOutboxRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, event: ChannelMessageChanged) -> None:
        self._session.add(
            OutboxEventModel(
                event_type=event.event_type,
                aggregate_id=event.message_id,
                payload=event.payload(),
            )
        )
        with store_errors("add outbox event"):
            await self._session.flush()

    async def claim_due(self, batch_size: int, max_attempts: int) -> list[OutboxRecord]:
        """Rows stay locked and marked processing until the caller commits."""
        now = datetime.now(timezone.utc)
        stmt = (
            select(OutboxEventModel)
            .where(
                OutboxEventModel.status.in_(_RETRYABLE),
                OutboxEventModel.attempts < max_attempts,
                OutboxEventModel.next_retry_at.is_(None) | (OutboxEventModel.next_retry_at <= now),
            )
            # per message, events leave in the order they were written
            .order_by(OutboxEventModel.id.asc())
            .limit(batch_size)
            .with_for_update(skip_locked=True)
        )
        with store_errors("claim outbox events"):
            rows = (await self._session.execute(stmt)).scalars().all()
            if rows:
                await self._session.execute(
                    update(OutboxEventModel)
                    .where(OutboxEventModel.id.in_([r.id for r in rows]))
                    .values(status="processing")
                )

        return [
            OutboxRecord(
                id=r.id,
                event_type=r.event_type,
                aggregate_id=r.aggregate_id,
                payload=r.payload,
                attempts=r.attempts,
            )
            for r in rows
        ]

    async def mark_sent(self, ids: list[int]) -> None:
        if not ids:
            return
        with store_errors("mark outbox events sent"):
            await self._session.execute(
                update(OutboxEventModel).where(OutboxEventModel.id.in_(ids)).values(status="sent")
            )

    async def mark_failed(self, record_id: int, retry_at: datetime | None) -> None:
        with store_errors("mark outbox event failed"):
            await self._session.execute(
                update(OutboxEventModel)
                .where(OutboxEventModel.id == record_id)
                .values(
                    status="failed" if retry_at is not None else "dead",
                    attempts=OutboxEventModel.attempts + 1,
                    next_retry_at=retry_at,
                )
            )
