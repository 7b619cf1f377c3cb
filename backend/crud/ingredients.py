import logging
import math
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.ingredient import Ingredient
from schemas.ingredient import IngredientCreate, IngredientUpdate
from crud.cascade import delete_batches_for_ingredient
from exceptions import ValidationError, NotFoundError, ConflictError
from utils import parse_id, sqlalchemy_to_dict
from utils.clock import now

logger = logging.getLogger(__name__)

def get_ingredient(db: Session, ingredient_id):
    parsed_id = parse_id(ingredient_id)
    if parsed_id is None:
        return None
    return db.query(Ingredient).filter(Ingredient.id == parsed_id).first()

def get_ingredients(db: Session):
    ingredients = db.query(Ingredient).order_by(Ingredient.name.asc()).all()
    logger.debug(f"Fetched {len(ingredients)} ingredients")
    return ingredients

def get_ingredient_by_name(db: Session, name: str, exclude_id: int = None):
    """Case-insensitive exact match on the trimmed name."""
    query = db.query(Ingredient).filter(func.lower(Ingredient.name) == name.strip().lower())
    if exclude_id is not None:
        query = query.filter(Ingredient.id != exclude_id)
    return query.first()

def _require_amount(value: float, field: str):
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{field} must be a non-negative number.")

def create_ingredient(db: Session, item: IngredientCreate):
    if not item.name or not item.name.strip() or item.required_amount is None or not item.unit or not item.unit.strip():
        raise ValidationError("Name, required_amount, and unit are required.")
    _require_amount(item.required_amount, "required_amount")

    if get_ingredient_by_name(db, item.name):
        logger.warning(f'Duplicate ingredient name rejected: "{item.name}"')
        raise ConflictError("An ingredient with this name already exists.")

    stamp = now()
    db_item = Ingredient(
        name=item.name.strip(),
        required_amount=float(item.required_amount),
        unit=item.unit.strip(),
        created_at=stamp,
        modified_at=stamp,
    )
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    logger.info(f'Ingredient created: "{db_item.name}" ({db_item.id})')
    return db_item

def update_ingredient(db: Session, ingredient_id, item: IngredientUpdate):
    db_item = get_ingredient(db, ingredient_id)
    if db_item is None:
        raise NotFoundError("Ingredient not found.")

    update_data = {k: v for k, v in item.model_dump(exclude_unset=True).items() if v is not None}
    logger.debug(f"Ingredient update payload for {db_item.id}: {update_data}")
    for field in ("name", "unit"):
        if field in update_data:
            update_data[field] = update_data[field].strip()
            if not update_data[field]:
                raise ValidationError(f"{field} must not be blank.")
    if "required_amount" in update_data:
        update_data["required_amount"] = float(update_data["required_amount"])
        _require_amount(update_data["required_amount"], "required_amount")

    if "name" in update_data and get_ingredient_by_name(db, update_data["name"], exclude_id=db_item.id):
        logger.warning(f'Duplicate ingredient name rejected on rename: "{update_data["name"]}"')
        raise ConflictError("An ingredient with this name already exists.")

    for key, value in update_data.items():
        setattr(db_item, key, value)
    db_item.modified_at = now()
    db.commit()
    db.refresh(db_item)
    logger.info(f"Ingredient updated: {db_item.id} - {db_item.name}")
    return db_item

def delete_ingredient(db: Session, ingredient_id) -> int:
    """Delete an ingredient and all of its batches. Returns how many batches went with it."""
    db_item = get_ingredient(db, ingredient_id)
    if db_item is None:
        raise NotFoundError("Ingredient not found.")

    old_values = sqlalchemy_to_dict(db_item)
    try:
        db.delete(db_item)
        removed = delete_batches_for_ingredient(db, db_item.id)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Failed to delete ingredient {old_values['id']}; nothing was removed")
        raise
    logger.info(f"Ingredient deleted: {old_values['id']} - {old_values['name']} ({removed} batches removed)")
    return removed
