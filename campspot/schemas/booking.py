"""Booking Schemas: camelCase request body for POST /api/book-camping."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    camping_spot_id: int = Field(alias="campingSpotId")
    check_in_date: date = Field(alias="checkInDate")
    check_out_date: date = Field(alias="checkOutDate")
