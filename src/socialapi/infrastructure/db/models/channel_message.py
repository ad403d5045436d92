from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Identity, Index, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from socialapi.infrastructure.db.base import Base


class ChannelMessageModel(Base):
    __tablename__ = "channel_message"

    id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default=text("''"))
    type: Mapped[str] = mapped_column(String(20), nullable=False)  # post | reply | join | leave | chat
    account_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    initial_channel_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
        onupdate=text("now()"),
    )

    interactions = relationship(
        "InteractionModel",
        back_populates="message",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_channel_message_channel_created", "initial_channel_id", "created_at"),
        Index("ix_channel_message_account", "account_id"),
    )
