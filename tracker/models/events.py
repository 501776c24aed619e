from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CompletionEvent:
    """A student finished an assignment.

    At most one per (assignment_id, user_id); the event source enforces it.
    """

    assignment_id: int
    user_id: int
    completed_at: int


@dataclass(frozen=True, slots=True)
class ViewEvent:
    """A student opened a note or downloaded a past paper.

    Note views and paper views live in separate collections, so
    ``resource_id`` is interpreted by whichever collection holds the event.
    """

    resource_id: int
    user_id: int
    viewed_at: int
