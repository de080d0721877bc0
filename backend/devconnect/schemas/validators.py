"""Shared field validators for request schemas."""


def require_text(v: str) -> str:
    """Strip surrounding whitespace; reject empty results."""
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty or whitespace")
    return v
