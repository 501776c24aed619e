from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CompletionDetail:
    """One completion joined to its assignment."""

    assignment_id: int
    title: str
    created_at: int
    completed_at: int
    elapsed_ms: int


@dataclass(slots=True)
class StudentAggregate:
    """Per-student accumulator built by the completion aggregator.

    Mutable only while the aggregator is filling ``completions``.
    """

    user_id: int
    name: str
    profile_image_url: str | None = None
    completions: list[CompletionDetail] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RankedEntry:
    user_id: int
    name: str
    profile_image_url: str | None
    completed_count: int
    average_elapsed_ms: float
    recent_completions: tuple[CompletionDetail, ...]
    position: int  # 1-based, distinct per entry
