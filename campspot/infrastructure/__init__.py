"""Infrastructure Layer: database pool, local image storage, logging setup.

Invariants:
    - Infrastructure imports core/ helpers but never api/ routes
"""
