"""Availability ORM: date windows for a camping spot, deleted with the spot."""

from datetime import date

from sqlalchemy import Integer, Boolean, Date, ForeignKey, true
from sqlalchemy.orm import Mapped, mapped_column

from campspot.db.base import Base


class Availability(Base):
    __tablename__ = "availabilities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    camping_spot_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("camping_spots.id"), nullable=False,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=true(),
    )
