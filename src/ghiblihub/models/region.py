"""Region model: a country/territory in which availability is tracked."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghiblihub.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghiblihub.models.availability import Availability


class Region(Base, TimestampMixin):
    """Reference data keyed by an ISO-like code such as "US" or "JP"."""

    __tablename__ = "regions"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    code: Mapped[str] = mapped_column(String(8), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    availabilities: Mapped[list["Availability"]] = relationship(back_populates="region")

    def __repr__(self) -> str:
        return f"<Region(code={self.code!r}, name={self.name!r})>"
