"""Mutation Policies: pure rules for the ordered sequences embedded in aggregates.

Invariants:
    - Every function returns a NEW list; inputs are never mutated in place
      (the ORM only detects reassigned JSON columns)
    - Presence is tested by linear scan on a single key ("user" or "id")
    - A failed precondition raises before anything is built, so callers persist nothing
    - Inserts prepend; deletes remove exactly one index (the first match)
    - A user id appears at most once in a likes sequence

Design Decisions:
    - Entries are plain dicts: they are stored as JSON on the parent row and
      serialized straight back out (ADR: one aggregate = one row)
    - Entry ids are generated by the caller: keeps this module deterministic
"""

from collections.abc import Iterable

from devconnect.core.errors import (
    NotAuthorizedError,
    ResourceNotFoundError,
    RuleViolationError,
)

SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")
PROFILE_FIELDS = (
    "company", "website", "location", "bio", "status", "githubusername",
)


def find_index(items: list[dict], key: str, value: str) -> int:
    """Index of the first entry whose key equals value (string compare), else -1."""
    for i, item in enumerate(items):
        if str(item.get(key)) == str(value):
            return i
    return -1


def prepend(items: list[dict], entry: dict) -> list[dict]:
    return [entry, *items]


def remove_at(items: list[dict], index: int) -> list[dict]:
    return items[:index] + items[index + 1:]


# ─── Likes ───────────────────────────────────────────────────────

def add_like(likes: list[dict], like_id: str, user_id: str) -> list[dict]:
    """Prepend a like for user_id. Raises if the user already liked."""
    if find_index(likes, "user", user_id) != -1:
        raise RuleViolationError("Post already liked", "ALREADY_LIKED")
    return prepend(likes, {"id": like_id, "user": str(user_id)})


def remove_like(likes: list[dict], user_id: str) -> list[dict]:
    """Remove user_id's like. Raises if the user has not liked."""
    index = find_index(likes, "user", user_id)
    if index == -1:
        raise RuleViolationError("Post has not yet been liked", "NOT_LIKED")
    return remove_at(likes, index)


# ─── Comments ────────────────────────────────────────────────────

def add_comment(comments: list[dict], comment: dict) -> list[dict]:
    return prepend(comments, comment)


def remove_comment(
    comments: list[dict], comment_id: str, user_id: str,
) -> list[dict]:
    """Remove a comment by its own id, only if user_id wrote it."""
    index = find_index(comments, "id", comment_id)
    if index == -1:
        raise RuleViolationError("Comment does not exist", "COMMENT_NOT_FOUND")
    if str(comments[index].get("user")) != str(user_id):
        raise NotAuthorizedError()
    return remove_at(comments, index)


# ─── Profile history (experience / education) ────────────────────

def add_entry(entries: list[dict], entry: dict) -> list[dict]:
    return prepend(entries, entry)


def remove_entry(
    entries: list[dict], entry_id: str, entry_type: str,
) -> list[dict]:
    """Remove a history entry by id. Raises ResourceNotFoundError(entry_type)."""
    index = find_index(entries, "id", entry_id)
    if index == -1:
        raise ResourceNotFoundError(entry_type, entry_id)
    return remove_at(entries, index)


# ─── Profile patch ───────────────────────────────────────────────

def split_skills(skills: str | Iterable[str]) -> list[str]:
    """'a, b ,c' -> ['a', 'b', 'c']. Empty fragments are dropped."""
    parts = skills.split(",") if isinstance(skills, str) else skills
    return [s.strip() for s in parts if s and s.strip()]


def build_profile_patch(fields: dict) -> dict:
    """Sparse patch from submitted profile fields.

    Only truthy values are included: absent or empty fields are left out,
    never nulled. Social links are nested under "social" with the same rule;
    "social" is omitted entirely when no link was submitted.
    """
    patch = {name: fields[name] for name in PROFILE_FIELDS if fields.get(name)}
    if fields.get("skills"):
        patch["skills"] = split_skills(fields["skills"])
    social = {name: fields[name] for name in SOCIAL_FIELDS if fields.get(name)}
    if social:
        patch["social"] = social
    return patch


def merge_social(current: dict | None, submitted: dict) -> dict:
    """Overlay submitted links on the stored ones, key by key."""
    return {**(current or {}), **submitted}
