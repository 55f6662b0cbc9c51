"""Dependency injection for FastAPI endpoints"""

from datetime import date
from fastapi import Request
from dominion_gateway.infrastructure.clients.insights import InsightClient
from dominion_gateway.infrastructure.keyword_store import InMemoryKeywordStore, KeywordOverrideStore

_keyword_store = InMemoryKeywordStore()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Evaluation date when the request does not pin one"""
    return date.today()


def get_insight_client() -> InsightClient:
    """Provide insight service client instance"""
    return InsightClient()


def get_keyword_store() -> KeywordOverrideStore:
    """Provide the keyword override store"""
    return _keyword_store
