import logging
import math
from sqlalchemy.orm import Session
from models.menu_item import MenuItem
from schemas.menu_item import MenuItemCreate, MenuItemUpdate
from exceptions import ValidationError, NotFoundError
from utils import parse_id
from utils.clock import now

logger = logging.getLogger(__name__)

def get_menu_item(db: Session, item_id):
    parsed_id = parse_id(item_id)
    if parsed_id is None:
        return None
    return db.query(MenuItem).filter(MenuItem.id == parsed_id).first()

def get_active_menu_items(db: Session):
    return db.query(MenuItem).filter(MenuItem.is_active.is_(True)).order_by(MenuItem.name.asc()).all()

def get_archived_menu_items(db: Session):
    return db.query(MenuItem).filter(MenuItem.is_active.is_(False)).order_by(MenuItem.name.asc()).all()

def _check_price(price: float):
    if not math.isfinite(price) or price < 0:
        raise ValidationError("price must be a non-negative number.")

def create_menu_item(db: Session, item: MenuItemCreate):
    if not item.name or item.price is None or not item.category:
        raise ValidationError("Name, price, and category are required.")
    _check_price(item.price)
    stamp = now()
    db_item = MenuItem(
        name=item.name.strip(),
        price=float(item.price),
        category=item.category.strip(),
        instructions=item.instructions or "",
        is_active=True,
        in_stock=True,
        created_at=stamp,
        modified_at=stamp,
    )
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    logger.info(f'Menu item created: "{db_item.name}" ({db_item.id})')
    return db_item

def update_menu_item(db: Session, item_id, item: MenuItemUpdate):
    db_item = get_menu_item(db, item_id)
    if db_item is None:
        raise NotFoundError("Item not found.")
    update_data = {k: v for k, v in item.model_dump(exclude_unset=True).items() if v is not None}
    if "price" in update_data:
        update_data["price"] = float(update_data["price"])
        _check_price(update_data["price"])
    for key, value in update_data.items():
        setattr(db_item, key, value)
    db_item.modified_at = now()
    db.commit()
    db.refresh(db_item)
    logger.info(f"Menu item updated: {db_item.id} - {db_item.name}")
    return db_item

def archive_menu_item(db: Session, item_id):
    """Soft delete: the item leaves the menu but stays restorable."""
    return update_menu_item(db, item_id, MenuItemUpdate(is_active=False, in_stock=False))

def restore_menu_item(db: Session, item_id):
    return update_menu_item(db, item_id, MenuItemUpdate(is_active=True, in_stock=True))

def delete_menu_item(db: Session, item_id):
    db_item = get_menu_item(db, item_id)
    if db_item is None:
        raise NotFoundError("Item not found.")
    db.delete(db_item)
    db.commit()
    logger.info(f"Menu item permanently deleted: {item_id}")
    return True
