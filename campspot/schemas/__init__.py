"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary; a missing field never reaches SQL

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Camping-spot creation is multipart, so its fields are declared as Form
      parameters on the route instead of a schema here
"""
