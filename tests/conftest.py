"""Shared test fixtures."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

import pytest

from socialapi.application.repositories.outbox import OutboxRecord
from socialapi.domain.entities.channel_message import ChannelMessage
from socialapi.domain.entities.interaction import Interaction
from socialapi.domain.events.channel_message import ChannelMessageChanged, LifecycleAction
from socialapi.domain.value_objects.enums import ChannelMessageType, InteractionType


def make_message(
    *,
    message_id: int = 0,
    body: str = "hello",
    type: ChannelMessageType = ChannelMessageType.POST,
    account_id: int = 1,
    initial_channel_id: int = 10,
) -> ChannelMessage:
    return ChannelMessage(
        id=message_id,
        body=body,
        type=type,
        account_id=account_id,
        initial_channel_id=initial_channel_id,
    )


def make_like(message_id: int, account_id: int, *, interaction_id: int = 0) -> Interaction:
    return Interaction(
        id=interaction_id,
        message_id=message_id,
        account_id=account_id,
        type_constant=InteractionType.LIKE,
        created_at=datetime.now(timezone.utc),
    )


@dataclass
class FakeChannelMessageRepo:
    """In-memory store; assigns ids sequentially from `next_id`."""

    next_id: int = 1
    error: Exception | None = None
    _rows: dict[int, ChannelMessage] = field(default_factory=dict)
    calls: list[tuple[str, Any]] = field(default_factory=list)

    def _check(self, name: str, arg: Any) -> None:
        self.calls.append((name, arg))
        if self.error is not None:
            raise self.error

    async def create(self, message: ChannelMessage) -> ChannelMessage:
        self._check("create", message)
        now = datetime.now(timezone.utc)
        stored = replace(message, id=self.next_id, created_at=now, updated_at=now)
        self._rows[stored.id] = stored
        self.next_id += 1
        return replace(stored)

    async def fetch(self, message_id: int) -> ChannelMessage | None:
        self._check("fetch", message_id)
        row = self._rows.get(message_id)
        return replace(row) if row else None

    async def update_partial(
        self,
        message_id: int,
        fields: dict[str, Any],
    ) -> ChannelMessage | None:
        self._check("update_partial", (message_id, dict(fields)))
        row = self._rows.get(message_id)
        if row is None:
            return None
        row = replace(row, updated_at=datetime.now(timezone.utc), **fields)
        self._rows[message_id] = row
        return replace(row)

    async def delete(self, message_id: int) -> bool:
        self._check("delete", message_id)
        return self._rows.pop(message_id, None) is not None

    async def fetch_by_ids(self, ids: Sequence[int]) -> list[ChannelMessage]:
        self._check("fetch_by_ids", list(ids))
        return [replace(self._rows[i]) for i in dict.fromkeys(ids) if i in self._rows]


@dataclass
class FakeInteractionReader:
    _interactions: list[Interaction] = field(default_factory=list)
    error: Exception | None = None

    async def list_actors(self, message_id: int, kind: InteractionType) -> list[int]:
        if self.error is not None:
            raise self.error
        return [
            i.account_id
            for i in self._interactions
            if i.message_id == message_id and i.type_constant == kind
        ]


@dataclass
class FakeOutbox:
    events: list[ChannelMessageChanged] = field(default_factory=list)
    pending: list[OutboxRecord] = field(default_factory=list)
    sent: list[int] = field(default_factory=list)
    failed: list[tuple[int, datetime | None]] = field(default_factory=list)

    async def add(self, event: ChannelMessageChanged) -> None:
        self.events.append(event)

    async def claim_due(self, batch_size: int, max_attempts: int) -> list[OutboxRecord]:
        due = [r for r in self.pending if r.attempts < max_attempts][:batch_size]
        self.pending = [r for r in self.pending if r not in due]
        return due

    async def mark_sent(self, ids: list[int]) -> None:
        self.sent.extend(ids)

    async def mark_failed(self, record_id: int, retry_at: datetime | None) -> None:
        self.failed.append((record_id, retry_at))


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    channel_messages: FakeChannelMessageRepo = field(default_factory=FakeChannelMessageRepo)
    interactions: FakeInteractionReader = field(default_factory=FakeInteractionReader)
    outbox: FakeOutbox = field(default_factory=FakeOutbox)
    _committed: bool = False

    async def after_create(self, message: ChannelMessage) -> None:
        await self._record("created", message)

    async def after_update(self, message: ChannelMessage) -> None:
        await self._record("updated", message)

    async def after_delete(self, message: ChannelMessage) -> None:
        await self._record("deleted", message)

    async def _record(self, action: LifecycleAction, message: ChannelMessage) -> None:
        await self.outbox.add(ChannelMessageChanged.from_entity(action, message))

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        pass


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()
