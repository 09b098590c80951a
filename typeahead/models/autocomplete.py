from pydantic import BaseModel


class SearchRequest(BaseModel):
    query: str | None = None


class SearchResponse(BaseModel):
    status: str = "success"
    query: str | None = None
    message: str


class SuggestionResponse(BaseModel):
    query: str
    suggestions: list[str]


class PopularResponse(BaseModel):
    queries: dict[str, int]


class CacheStatsResponse(BaseModel):
    cached_prefixes: int
    total_queries: int
    hits: int
    misses: int
