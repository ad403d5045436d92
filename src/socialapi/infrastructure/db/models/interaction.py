from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, ForeignKey, Identity, Index, String, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from socialapi.infrastructure.db.base import Base


class InteractionModel(Base):
    __tablename__ = "interaction"

    id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    message_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("channel_message.id", ondelete="CASCADE"),
        nullable=False,
    )
    account_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    type_constant: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )

    message = relationship("ChannelMessageModel", back_populates="interactions")

    __table_args__ = (
        UniqueConstraint(
            "message_id",
            "account_id",
            "type_constant",
            name="uq_interaction_actor",
        ),
        Index("ix_interaction_message_type", "message_id", "type_constant", "created_at"),
    )
