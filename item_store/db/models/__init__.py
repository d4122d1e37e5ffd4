from item_store.db.models.item import Item

__all__ = ["Item"]
