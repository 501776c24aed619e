from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Student:
    """Public projection of a user account. Credentials never reach the core."""

    id: int
    name: str
    profile_image_url: str | None = None
