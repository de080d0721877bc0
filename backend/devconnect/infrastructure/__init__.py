"""Infrastructure Layer: database sessions, outbound HTTP, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - External failures mapped to typed errors from core/errors.py
"""
