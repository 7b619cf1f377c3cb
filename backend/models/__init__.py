from models.ingredient import Ingredient
from models.inventory_batch import InventoryBatch
from models.menu_item import MenuItem

__all__ = ['Ingredient', 'InventoryBatch', 'MenuItem',]
