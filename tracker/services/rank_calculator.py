"""Turn per-student aggregates into an ordered leaderboard.

Ordering, fastest first:
  1. average elapsed time ascending
  2. completed count descending (more work wins a tie)
  3. user id ascending

Positions are the 1-based index in that order, so two students with the
same average still get different positions (e.g. 3 and 4).
"""

from __future__ import annotations

from collections.abc import Mapping

from tracker.models.ranking import CompletionDetail, RankedEntry, StudentAggregate

RECENT_COMPLETIONS_LIMIT = 3


def _recent(
    completions: list[CompletionDetail], limit: int
) -> tuple[CompletionDetail, ...]:
    ordered = sorted(completions, key=lambda c: (-c.completed_at, c.assignment_id))
    return tuple(ordered[:limit])


def rank_students(
    aggregates: Mapping[int, StudentAggregate],
    *,
    recent_limit: int = RECENT_COMPLETIONS_LIMIT,
) -> list[RankedEntry]:
    """Rank every student with at least one completion.

    Returns the full list; truncating to a top-N is left to the caller.
    """
    scored: list[tuple[float, StudentAggregate]] = []
    for aggregate in aggregates.values():
        if not aggregate.completions:
            continue
        total = sum(c.elapsed_ms for c in aggregate.completions)
        scored.append((total / len(aggregate.completions), aggregate))

    scored.sort(key=lambda s: (s[0], -len(s[1].completions), s[1].user_id))

    return [
        RankedEntry(
            user_id=aggregate.user_id,
            name=aggregate.name,
            profile_image_url=aggregate.profile_image_url,
            completed_count=len(aggregate.completions),
            average_elapsed_ms=average,
            recent_completions=_recent(aggregate.completions, recent_limit),
            position=index,
        )
        for index, (average, aggregate) in enumerate(scored, start=1)
    ]


def position_of(ranking: list[RankedEntry], user_id: int) -> int | None:
    for entry in ranking:
        if entry.user_id == user_id:
            return entry.position
    return None
