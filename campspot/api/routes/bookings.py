"""Bookings: create a confirmed stay and list a user's stays.

Invariants:
    - New bookings are always written with status "confirmed"
    - A user's bookings come back newest check-in first, joined with spot details
    - Zero bookings for a user is a 404
"""

import logging

from fastapi import APIRouter, Depends, status

from campspot.core.errors import ResourceNotFoundError
from campspot.infrastructure.database import Database, get_db
from campspot.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["bookings"])

BOOKING_STATUS_CONFIRMED = "confirmed"

USER_BOOKINGS_SQL = """
    SELECT b.id, b.camping_spot_id, b.check_in_date, b.check_out_date, b.status,
           cs.name, cs.location, cs.price_per_night, cs.image_path
    FROM bookings b
    JOIN camping_spots cs ON cs.id = b.camping_spot_id
    WHERE b.user_id = ?
    ORDER BY b.check_in_date DESC
"""


@router.post("/book-camping", status_code=status.HTTP_201_CREATED)
async def book_camping(body: BookingCreate, db: Database = Depends(get_db)):
    await db.execute(
        "INSERT INTO bookings "
        "(user_id, camping_spot_id, check_in_date, check_out_date, status) "
        "VALUES (?, ?, ?, ?, ?)",
        [
            body.user_id, body.camping_spot_id,
            body.check_in_date, body.check_out_date,
            BOOKING_STATUS_CONFIRMED,
        ],
    )
    logger.info(
        "Booking confirmed",
        extra={"user_id": body.user_id, "camping_spot_id": body.camping_spot_id},
    )
    return {"message": "Booking confirmed", "status": BOOKING_STATUS_CONFIRMED}


@router.get("/user-bookings/{user_id}")
async def list_user_bookings(user_id: int, db: Database = Depends(get_db)):
    rows = await db.execute(USER_BOOKINGS_SQL, [user_id])
    if not rows:
        raise ResourceNotFoundError("Bookings for user", str(user_id))
    return list(rows)
