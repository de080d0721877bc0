"""API Layer: FastAPI routes, request dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses; unexpected failures are
      plain-text 500s

Design Decisions:
    - Thin routes delegate to services
"""
