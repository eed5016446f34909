"""Users: lookup by email, registration, login and sparse profile updates.

Invariants:
    - Email uniqueness is checked with a SELECT before the INSERT (not atomic:
      two concurrent registrations can both pass; the unique constraint is the backstop)
    - Login compares the stored password with exact string equality
    - Login failure is 401 with one message for unknown email and wrong password
    - Profile UPDATE writes only supplied fields and always advances updated_at
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from campspot.core.errors import (
    EmailAlreadyRegisteredError, InvalidCredentialsError, ResourceNotFoundError,
)
from campspot.core.sql_builder import USER_PATCH_COLUMNS, build_update
from campspot.infrastructure.database import Database, get_db
from campspot.schemas.user import (
    LoginRequest, RegisterRequest, UserProfile, UserSummary, UserUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["users"])


@router.get("/users", response_model=UserSummary)
async def get_user_by_email(
    email: str = Query(min_length=1), db: Database = Depends(get_db),
):
    rows = await db.execute(
        "SELECT username, email, role FROM users WHERE email = ?", [email],
    )
    if not rows:
        raise ResourceNotFoundError("User", email)
    return rows[0]


@router.post("/login", response_model=UserProfile)
async def login(body: LoginRequest, db: Database = Depends(get_db)):
    rows = await db.execute(
        "SELECT id, username, email, role, password FROM users WHERE email = ?",
        [body.email],
    )
    # TODO: replace plaintext comparison once stored passwords are hashed
    if not rows or rows[0]["password"] != body.password:
        logger.warning("Login rejected", extra={"email": body.email})
        raise InvalidCredentialsError()
    user = rows[0]
    logger.info("User logged in", extra={"user_id": user["id"]})
    return UserProfile(
        id=user["id"], username=user["username"],
        email=user["email"], role=user["role"],
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: Database = Depends(get_db)):
    existing = await db.execute(
        "SELECT id FROM users WHERE email = ?", [body.email],
    )
    if existing:
        logger.warning("Registration for taken email", extra={"email": body.email})
        raise EmailAlreadyRegisteredError(body.email)

    await db.execute(
        "INSERT INTO users (username, email, password, role) VALUES (?, ?, ?, ?)",
        [body.username, body.email, body.password, body.role],
    )
    logger.info(
        f"Registered user with role {body.role}", extra={"email": body.email},
    )
    return {"message": "User registered successfully"}


@router.put("/users/{user_id}")
async def update_user(
    user_id: int, body: UserUpdate, db: Database = Depends(get_db),
):
    sql, params = build_update(
        "users", body.model_dump(exclude_none=True), USER_PATCH_COLUMNS,
        key_column="id", key_value=user_id,
    )
    result = await db.execute(sql, params)
    if result.rowcount == 0:
        raise ResourceNotFoundError("User", str(user_id))
    logger.info(
        "User updated", extra={"user_id": user_id, "rowcount": result.rowcount},
    )
    return {"message": "User updated successfully"}
