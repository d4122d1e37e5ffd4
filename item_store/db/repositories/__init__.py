# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from item_store.db.repositories.item_repository import ItemRepository

__all__ = ["ItemRepository"]
