from fastapi import Request

from typeahead.services.query_engine import QueryEngine


def get_engine(request: Request) -> QueryEngine:
    """The engine built during application startup."""
    return request.app.state.engine
