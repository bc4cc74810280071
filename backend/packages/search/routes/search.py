from typing import Optional
from fastapi import APIRouter, Depends, Query

from common.core.responses import ApiResponse
from common.core.telemetry import trace_span
from packages.auth.dependencies import get_current_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.search.models.domain.search import SearchResponse
from packages.search.services.search_service import SearchService

router = APIRouter()


def get_search_service() -> SearchService:
    return SearchService()


@router.get("", response_model=ApiResponse[SearchResponse])
@trace_span
async def search(
    q: str = Query("", max_length=200),
    limit: Optional[int] = Query(None, ge=1, le=50),
    current_user: AuthenticatedUser = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service),
):
    return ApiResponse.ok(await search_service.search(q, limit))
