"""Camping Spots: listing, lookup, owner listings, creation with image, deletion.

Invariants:
    - List endpoint projects a fixed summary column set
    - Single-spot lookup and owner listing answer 404 when nothing matches
    - Creation is multipart: form fields plus an optional image file
    - A failed INSERT removes the image it already stored
    - Deletion runs four statements in order (reviews, bookings, availabilities,
      spot) with no surrounding transaction; 404 when the spot row was absent
    - A failure part-way through deletion surfaces as 500 with no rollback
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from campspot.config import Settings, get_settings
from campspot.core.errors import ResourceNotFoundError
from campspot.infrastructure.database import Database, get_db
from campspot.infrastructure.image_storage import delete_image, save_image

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["camping-spots"])

SPOT_COLUMNS = (
    "id, name, description, location, price_per_night, image_path, owner_user_id"
)
SPOT_SUMMARY_COLUMNS = "id, name, location, price_per_night, image_path"

# Child tables first, the spot itself last.
CASCADE_DELETE_STATEMENTS = (
    "DELETE FROM reviews WHERE camping_spot_id = ?",
    "DELETE FROM bookings WHERE camping_spot_id = ?",
    "DELETE FROM availabilities WHERE camping_spot_id = ?",
    "DELETE FROM camping_spots WHERE id = ?",
)


@router.get("/camping-spots")
async def list_camping_spots(db: Database = Depends(get_db)):
    rows = await db.execute(f"SELECT {SPOT_SUMMARY_COLUMNS} FROM camping_spots")
    return list(rows)


@router.get("/camping-spots/{spot_id}")
async def get_camping_spot(spot_id: int, db: Database = Depends(get_db)):
    rows = await db.execute(
        f"SELECT {SPOT_COLUMNS} FROM camping_spots WHERE id = ?", [spot_id],
    )
    if not rows:
        raise ResourceNotFoundError("Camping spot", str(spot_id))
    return rows[0]


@router.get("/owner-camping-spots/{user_id}")
async def list_owner_camping_spots(user_id: int, db: Database = Depends(get_db)):
    rows = await db.execute(
        f"SELECT {SPOT_COLUMNS} FROM camping_spots WHERE owner_user_id = ?",
        [user_id],
    )
    if not rows:
        raise ResourceNotFoundError("Camping spots for owner", str(user_id))
    return list(rows)


@router.post("/camping-spots", status_code=status.HTTP_201_CREATED)
async def create_camping_spot(
    name: str = Form(min_length=1),
    description: str = Form(min_length=1),
    location: str = Form(min_length=1),
    price_per_night: float = Form(),
    owner_user_id: int = Form(),
    image: UploadFile | None = File(None),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    image_path = await save_image(
        image, settings.upload_dir, settings.upload_url_prefix,
    )
    try:
        await db.execute(
            "INSERT INTO camping_spots "
            "(name, description, location, price_per_night, image_path, owner_user_id) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            [name, description, location, price_per_night, image_path, owner_user_id],
        )
    except Exception:
        # No row references the file
        delete_image(image_path, settings.upload_dir)
        raise
    logger.info("Camping spot created", extra={"user_id": owner_user_id})
    return {"message": "Camping spot created successfully", "image_path": image_path}


@router.delete("/camping-spot/{camping_id}")
async def delete_camping_spot(camping_id: int, db: Database = Depends(get_db)):
    result = None
    for statement in CASCADE_DELETE_STATEMENTS:
        result = await db.execute(statement, [camping_id])
    if result.rowcount == 0:
        raise ResourceNotFoundError("Camping spot", str(camping_id))
    logger.info("Camping spot deleted", extra={"camping_spot_id": camping_id})
    return {"message": "Camping spot deleted successfully"}
