"""Category keyword overrides and free-text categorization"""

from fastapi import APIRouter, Depends, Query

from dominion_gateway.api.v1.schemas import CategorizeRequest, CategorizeResponse, KeywordOverridesSchema
from dominion_gateway.api.dependencies import get_keyword_store
from dominion_gateway.domain.categorizer import categorize
from dominion_gateway.domain.models import KeywordOverrides
from dominion_gateway.infrastructure.keyword_store import KeywordOverrideStore

router = APIRouter()


def _to_schema(overrides: KeywordOverrides) -> KeywordOverridesSchema:
    return KeywordOverridesSchema(added=overrides.added, removed=overrides.removed)


@router.get("/settings/category-keywords", response_model=KeywordOverridesSchema)
def get_category_keywords(
    user_id: str = Query(..., min_length=1, description="User identifier"),
    store: KeywordOverrideStore = Depends(get_keyword_store),
):
    """User's additions to and removals from the default keyword map"""
    return _to_schema(store.get(user_id))


@router.patch("/settings/category-keywords", response_model=KeywordOverridesSchema)
def update_category_keywords(
    request_body: KeywordOverridesSchema,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    store: KeywordOverrideStore = Depends(get_keyword_store),
):
    """Replace the user's overrides; categories with empty lists are dropped"""
    return _to_schema(store.save(user_id, request_body.to_domain()))


@router.post("/categorize", response_model=CategorizeResponse)
def categorize_description(
    request_body: CategorizeRequest,
    store: KeywordOverrideStore = Depends(get_keyword_store),
):
    """Category for a free-text expense name, honouring the user's overrides when given"""
    overrides = store.get(request_body.user_id) if request_body.user_id else None
    return CategorizeResponse(
        description=request_body.description,
        category=categorize(request_body.description, overrides),
    )
