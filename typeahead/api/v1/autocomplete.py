from fastapi import APIRouter, Depends, Query, Request

from typeahead.api.deps import get_engine
from typeahead.config import settings
from typeahead.models.autocomplete import (
    CacheStatsResponse,
    PopularResponse,
    SearchRequest,
    SearchResponse,
    SuggestionResponse,
)
from typeahead.services.query_engine import QueryEngine
from typeahead.services.trie import normalize

router = APIRouter()


# Plain ``def`` handlers run in FastAPI's thread pool, so concurrent requests
# reach the engine from multiple threads.
@router.get("/autocomplete", response_model=SuggestionResponse)
def autocomplete(
    request: Request,
    query: str = Query("", max_length=100),
    limit: int = Query(settings.max_suggestions, ge=1, le=settings.max_suggestions_cap),
    engine: QueryEngine = Depends(get_engine),
):
    """Get autocompletion suggestions for a search prefix.

    Suggestions come from the in-memory trie, ranked by how often each query
    has been searched. A blank prefix returns no suggestions.
    """
    suggestions, cache_status = engine.trace_suggest(query, limit)
    # Picked up by RequestLoggingMiddleware
    request.state.prefix = normalize(query)
    request.state.cache_status = cache_status
    return {"query": query, "suggestions": suggestions}


@router.post("/search", response_model=SearchResponse)
def search(
    request: Request,
    body: SearchRequest,
    engine: QueryEngine = Depends(get_engine),
):
    """Record a submitted search so it ranks higher in future suggestions."""
    if body.query and body.query.strip():
        engine.record(body.query)
        request.state.recorded = normalize(body.query)
        message = "Search recorded"
    else:
        message = "Empty query ignored"
    return {"status": "success", "query": body.query, "message": message}


@router.get("/popular", response_model=PopularResponse)
def popular(
    limit: int = Query(settings.popular_default_limit, ge=1, le=1000),
    engine: QueryEngine = Depends(get_engine),
):
    return {"queries": engine.popular(limit)}


@router.get("/stats/cache", response_model=CacheStatsResponse)
def cache_stats(engine: QueryEngine = Depends(get_engine)):
    return {
        "cached_prefixes": len(engine.cache),
        "total_queries": len(engine.index),
        "hits": engine.cache.hits,
        "misses": engine.cache.misses,
    }
