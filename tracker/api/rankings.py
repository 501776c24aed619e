"""Leaderboard endpoints.

The rank calculator always returns the full ordering; these handlers are
where it gets cut down to the top N for display.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tracker.api.dependencies import get_leaderboard_service, require_unit
from tracker.api.schemas import RankedEntryOut
from tracker.core.config import SETTINGS
from tracker.models.unit import Unit
from tracker.services.leaderboard_service import LeaderboardService

router = APIRouter(prefix="/v1", tags=["rankings"])

_MAX_LIMIT = 100


@router.get("/units/{unit_code}/rankings", response_model=list[RankedEntryOut])
async def get_unit_rankings(
    unit: Annotated[Unit, Depends(require_unit)],
    service: Annotated[LeaderboardService, Depends(get_leaderboard_service)],
    limit: Annotated[int | None, Query(ge=1, le=_MAX_LIMIT)] = None,
) -> list[RankedEntryOut]:
    ranking = await service.compute_unit_ranking(unit.unit_code)
    top = ranking[: limit or SETTINGS.leaderboard_size]
    return [RankedEntryOut.from_entry(e) for e in top]


@router.get("/rankings", response_model=list[RankedEntryOut])
async def get_overall_rankings(
    service: Annotated[LeaderboardService, Depends(get_leaderboard_service)],
    limit: Annotated[int | None, Query(ge=1, le=_MAX_LIMIT)] = None,
) -> list[RankedEntryOut]:
    ranking = await service.compute_overall_ranking()
    top = ranking[: limit or SETTINGS.leaderboard_size]
    return [RankedEntryOut.from_entry(e) for e in top]
