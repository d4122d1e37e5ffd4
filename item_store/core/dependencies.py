"""
FastAPI dependencies - injection for the store, translator and services (SOLID: Dependency Inversion).
Challenge: Services take collaborators as parameters; tests override the leaves only.
"""

from typing import Annotated

from fastapi import Depends

from item_store.config import get_settings
from item_store.db.repositories.item_repository import ItemRepository
from item_store.db.session import SessionFactory
from item_store.services.item_service import ItemService
from item_store.services.ports import RecordStore, Translator
from item_store.services.translation_cache import TranslationCacheService
from item_store.translation.translate_client import get_translator


def get_record_store(session_factory: SessionFactory) -> RecordStore:
    return ItemRepository(session_factory)


Store = Annotated[RecordStore, Depends(get_record_store)]
TranslatorDep = Annotated[Translator, Depends(get_translator)]


def get_item_service(store: Store) -> ItemService:
    return ItemService(store)


def get_translation_cache(store: Store, translator: TranslatorDep) -> TranslationCacheService:
    settings = get_settings()
    return TranslationCacheService(
        store,
        translator,
        source_language=settings.source_language,
        fallback_prefix=settings.fallback_attribute_prefix,
    )


ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
TranslationCacheDep = Annotated[TranslationCacheService, Depends(get_translation_cache)]
