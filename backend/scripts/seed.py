import sys
import os
import json
import logging
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

# Add the parent directory to sys.path to allow imports from backend
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Database, get_database_url
from models.ingredient import Ingredient
from models.inventory_batch import InventoryBatch
from models.menu_item import MenuItem
from schemas.ingredient import IngredientCreate
from schemas.inventory_batch import InventoryBatchCreate
from schemas.menu_item import MenuItemCreate
from crud.ingredients import create_ingredient
from crud.inventory_batches import create_batch
from crud.menu_items import create_menu_item
from utils.clock import today

logger = logging.getLogger("seed")

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


def load_fixture(data_dir, filename):
    with open(os.path.join(data_dir, filename), encoding="utf-8") as f:
        return json.load(f)


def reset(db):
    """Remove every menu item, ingredient and batch."""
    batches = db.query(InventoryBatch).delete(synchronize_session=False)
    ingredients = db.query(Ingredient).delete(synchronize_session=False)
    menu_items = db.query(MenuItem).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Cleared {menu_items} menu items, {ingredients} ingredients and {batches} inventory batches.")


def seed(database: Database, data_dir: str = DATA_DIR) -> dict:
    """
    Replace the menu and inventory with the JSON fixtures in `data_dir`.

    menu_items.json holds menu items. ingredients.json holds ingredients, each
    with a `batches` list whose expiration dates are given as days from today.
    Everything goes through the repositories, so fixtures are validated the
    same way API input is.
    """
    menu_data = load_fixture(data_dir, "menu_items.json")
    ingredient_data = load_fixture(data_dir, "ingredients.json")

    counts = {"menu_items": 0, "ingredients": 0, "inventory_batches": 0}
    with database.session_scope() as db:
        reset(db)

        for item in menu_data:
            create_menu_item(db, MenuItemCreate(**item))
            counts["menu_items"] += 1
        logger.info(f"Seeded {counts['menu_items']} menu items.")

        for entry in ingredient_data:
            batches = entry.pop("batches", [])
            ingredient = create_ingredient(db, IngredientCreate(**entry))
            counts["ingredients"] += 1
            for batch in batches:
                create_batch(db, InventoryBatchCreate(
                    ingredient_id=ingredient.id,
                    initial_amount=batch["initial_amount"],
                    expiration_date=today() + timedelta(days=batch["expires_in_days"]),
                    total_cost=batch["total_cost"],
                ))
                counts["inventory_batches"] += 1
        logger.info(f"Seeded {counts['ingredients']} ingredients and {counts['inventory_batches']} inventory batches.")
    return counts


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    database = Database(get_database_url()).connect()
    try:
        seed(database)
    except Exception:
        logger.exception("Seeding failed")
        sys.exit(1)
    finally:
        database.close()
