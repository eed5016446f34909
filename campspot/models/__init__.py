"""ORM Models: table declarations for the marketplace schema.

Invariants:
    - All models inherit from Base (db/base.py)
    - Routes never query through these classes; they exist for schema
      creation (tests, Alembic) and as the column reference for raw SQL

Design Decisions:
    - One file per table
    - All models imported here so Base.metadata is complete on package import
"""

from campspot.models.user import User  # noqa: F401
from campspot.models.camping_spot import CampingSpot  # noqa: F401
from campspot.models.booking import Booking  # noqa: F401
from campspot.models.review import Review  # noqa: F401
from campspot.models.availability import Availability  # noqa: F401
