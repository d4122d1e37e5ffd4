"""
Item endpoints - create, read, partial update, translated description.
Challenge: Validation, 404/409 handling, cache flags in the translation response.
Design: Thin controller; services hold business logic and raise typed errors
that item_store.main turns into status codes.
"""

from typing import Any

from fastapi import APIRouter, Body, Query, status

from item_store.config import get_settings
from item_store.core.dependencies import ItemServiceDep, TranslationCacheDep
from item_store.schemas.item import ItemCreate, ItemResponse, TranslationResponse

router = APIRouter()
settings = get_settings()


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(svc: ItemServiceDep, data: ItemCreate):
    """Create item. 409 if (ownerId, itemId) already exists."""
    item = await svc.create(data.as_record_fields())
    return ItemResponse.model_validate(item.to_view())


@router.get("/{owner_id}/{item_id}", response_model=ItemResponse)
async def get_item(svc: ItemServiceDep, owner_id: str, item_id: str):
    item = await svc.get(owner_id, item_id)
    return ItemResponse.model_validate(item.to_view())


@router.put("/{owner_id}/{item_id}", response_model=ItemResponse)
async def update_item(
    svc: ItemServiceDep,
    owner_id: str,
    item_id: str,
    changes: dict[str, Any] = Body(...),
):
    """Partial update: only supplied fields change; ownerId/itemId in the body are ignored."""
    item = await svc.update(owner_id, item_id, changes)
    return ItemResponse.model_validate(item.to_view())


@router.get("/{owner_id}/{item_id}/translation", response_model=TranslationResponse)
async def translate_item(
    cache: TranslationCacheDep,
    owner_id: str,
    item_id: str,
    language: str = Query(settings.default_target_language),
):
    """Description in `language`, served from the item's translation cache when present."""
    result = await cache.get_translation(owner_id, item_id, language)
    return TranslationResponse(
        item=ItemResponse.model_validate(result.item),
        translated_text=result.translated_text,
        from_cache=result.from_cache,
        used_fallback_storage=result.used_fallback_storage,
        caching_failed=result.caching_failed,
        cache_tier=result.cache_tier.value if result.cache_tier else None,
    )
