"""Core Layer: pure logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - Error types and SQL builders only; every function is deterministic
"""
