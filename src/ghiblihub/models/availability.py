"""Availability model: where a film can be watched, and how."""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghiblihub.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghiblihub.models.movie import Movie
    from ghiblihub.models.platform import Platform
    from ghiblihub.models.region import Region


class AvailabilityType(str, enum.Enum):
    FREE = "FREE"
    SUBSCRIPTION = "SUBSCRIPTION"
    RENTAL = "RENTAL"
    PURCHASE = "PURCHASE"


class Availability(Base, TimestampMixin):
    """
    Availability record.

    Links a movie, a platform and a region with the access type a viewer gets
    there. Every row references exactly one of each; ``last_checked`` records
    when the offer was last verified and is surfaced as data freshness.
    """

    __tablename__ = "availabilities"
    __table_args__ = (
        UniqueConstraint(
            "movie_id",
            "platform_id",
            "region_id",
            "type",
            name="uq_movie_platform_region_type",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Foreign keys
    movie_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    platform_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("platforms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    region_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("regions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Offer details
    type: Mapped[AvailabilityType] = mapped_column(
        Enum(AvailabilityType, name="availability_type"),
        nullable=False,
    )
    url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    price_info: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_checked: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    movie: Mapped["Movie"] = relationship(back_populates="availabilities")
    platform: Mapped["Platform"] = relationship(back_populates="availabilities")
    region: Mapped["Region"] = relationship(back_populates="availabilities")

    def __repr__(self) -> str:
        return (
            f"<Availability(movie_id={self.movie_id!r}, "
            f"platform_id={self.platform_id!r}, "
            f"region_id={self.region_id!r}, "
            f"type={self.type})>"
        )
