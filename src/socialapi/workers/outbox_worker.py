"""Outbox worker: relays channel message lifecycle events to Redis."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import redis.asyncio as aioredis

from socialapi.application.ports.bus import EventPublisher
from socialapi.application.repositories.outbox import OutboxRecord
from socialapi.application.uow import UnitOfWork
from socialapi.config import settings
from socialapi.infrastructure.bus.redis_publisher import RedisEventPublisher
from socialapi.infrastructure.db.session import AsyncSessionLocal
from socialapi.infrastructure.db.uow import SqlAlchemyUoW
from socialapi.log import configure_logging

logger = logging.getLogger(__name__)

BASE_DELAY_SECONDS = 5
MAX_DELAY_SECONDS = 300


def calc_backoff(attempts: int, *, now: datetime | None = None) -> datetime:
    delay = min(BASE_DELAY_SECONDS * (2 ** attempts), MAX_DELAY_SECONDS)
    return (now or datetime.now(timezone.utc)) + timedelta(seconds=delay)


def next_retry(record: OutboxRecord, max_attempts: int) -> datetime | None:
    """None once this failure uses up the record's last attempt."""
    if record.attempts + 1 >= max_attempts:
        return None
    return calc_backoff(record.attempts)


async def process_batch(uow: UnitOfWork, publisher: EventPublisher) -> int:
    """Publish one batch of due events. Returns how many were sent."""
    max_attempts = settings.OUTBOX_MAX_ATTEMPTS
    batch = await uow.outbox.claim_due(settings.OUTBOX_BATCH_SIZE, max_attempts)
    if not batch:
        return 0

    sent_ids: list[int] = []
    for record in batch:
        try:
            event = record.to_event()
        except (KeyError, ValueError):
            logger.exception("Outbox record %d is malformed, giving up", record.id)
            await uow.outbox.mark_failed(record.id, None)
            continue

        try:
            await publisher.publish(event)
        except Exception:
            retry_at = next_retry(record, max_attempts)
            logger.exception(
                "Failed to publish %s for message %d (record %d, %s)",
                event.event_type,
                record.aggregate_id,
                record.id,
                f"retry at {retry_at.isoformat()}" if retry_at else "giving up",
            )
            await uow.outbox.mark_failed(record.id, retry_at)
        else:
            sent_ids.append(record.id)

    await uow.outbox.mark_sent(sent_ids)
    await uow.commit()
    if sent_ids:
        logger.info("Published %d channel message events", len(sent_ids))
    return len(sent_ids)


async def run_outbox_worker() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    publisher = RedisEventPublisher(redis, settings.EVENTS_TOPIC_PREFIX)

    logger.info(
        "Outbox worker started (poll=%.1fs, batch=%d, max_attempts=%d)",
        settings.OUTBOX_POLL_INTERVAL,
        settings.OUTBOX_BATCH_SIZE,
        settings.OUTBOX_MAX_ATTEMPTS,
    )

    try:
        while True:
            try:
                async with AsyncSessionLocal() as session:
                    async with SqlAlchemyUoW(session) as uow:
                        await process_batch(uow, publisher)
            except Exception:
                logger.exception("Outbox worker loop error")
            await asyncio.sleep(settings.OUTBOX_POLL_INTERVAL)
    finally:
        await redis.aclose()


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(run_outbox_worker())


if __name__ == "__main__":
    main()
