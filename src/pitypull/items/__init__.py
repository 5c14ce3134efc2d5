from .catalog import Catalog, InMemoryCatalog
from .models import Item
from .selector import ItemSelector

__all__ = ["Catalog", "InMemoryCatalog", "Item", "ItemSelector"]
