"""CampingSpot ORM: a listing owned by a user.

Invariants:
    - owner_user_id references users.id
    - image_path is the public upload path (nullable when no image was sent)

Design Decisions:
    - No ON DELETE CASCADE on child tables: bookings, reviews and availabilities
      are deleted by the delete route, one statement per table
"""

from decimal import Decimal

from sqlalchemy import String, Text, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from campspot.db.base import Base


class CampingSpot(Base):
    __tablename__ = "camping_spots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    owner_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
