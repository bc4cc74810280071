from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class SearchResultType(str, Enum):
    EVENT = "event"
    COMPANY = "company"
    SUBSECTOR = "subsector"


class SearchResult(BaseModel):
    # Subsector hits have no row of their own
    id: Optional[int] = None
    type: SearchResultType
    title: str
    subtitle: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResult] = Field(default_factory=list)
    total_count: int = 0
