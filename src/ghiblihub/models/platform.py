"""Platform model: a service or channel through which films are offered."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghiblihub.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghiblihub.models.availability import Availability


class PlatformType(str, enum.Enum):
    STREAMING = "STREAMING"
    RENTAL = "RENTAL"
    PURCHASE = "PURCHASE"
    FREE = "FREE"
    CINEMA = "CINEMA"
    PHYSICAL = "PHYSICAL"


class Platform(Base, TimestampMixin):
    """Reference data; names are unique and stable."""

    __tablename__ = "platforms"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    type: Mapped[PlatformType] = mapped_column(
        Enum(PlatformType, name="platform_type"),
        nullable=False,
    )
    logo: Mapped[str | None] = mapped_column(String(500), nullable=True)

    availabilities: Mapped[list["Availability"]] = relationship(back_populates="platform")

    def __repr__(self) -> str:
        return f"<Platform(id={self.id!r}, name={self.name!r}, type={self.type})>"
