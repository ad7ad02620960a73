from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mentorhub.core.response import DataResponse
from mentorhub.db.base import get_db
from mentorhub.schemas.analytics import SearchResults, Suggestion
from mentorhub.services.search import SearchService

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("", response_model=DataResponse[SearchResults], response_model_exclude_none=True)
async def global_search(
    query: Optional[str] = Query(default=None),
    type: Optional[str] = Query(default=None, description="users | skills | courses | opportunities | all"),
    limit: Optional[str] = Query(default=None, description="Max results per type (1-100)"),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await SearchService(session).search(query, type, limit)}


@router.get("/suggestions", response_model=DataResponse[list[Suggestion]])
async def search_suggestions(
    query: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_db),
):
    return {"data": await SearchService(session).suggestions(query)}
