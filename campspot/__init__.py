"""Campspot: REST backend for a camping-spot booking marketplace.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
