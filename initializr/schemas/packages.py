from typing import List, Optional

from pydantic import BaseModel


class SearchRecord(BaseModel):
    path: str
    synopsis: str = ""
    version: Optional[str] = None
    downloads_hint: Optional[int] = None
    advisory: bool = False


class PackageFetchResponse(BaseModel):
    success: bool
    query: str
    provider: str
    count: int
    results: List[SearchRecord] = []
    error: Optional[str] = None
    cache_hit: bool = False
    timestamp: int


class StatsResponse(BaseModel):
    total_generations: int
    total_downloads: int
