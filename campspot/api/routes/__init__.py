"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter
    - Handlers validate presence, run SQL through the Query Access Layer one
      statement at a time, and raise CampspotError subclasses for 4xx outcomes

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
