import logging
import math
from sqlalchemy import case, literal, null, DateTime
from sqlalchemy.orm import Session, contains_eager
from models.ingredient import Ingredient
from models.inventory_batch import InventoryBatch
from schemas.inventory_batch import InventoryBatchCreate, InventoryBatchUpdate
from exceptions import ValidationError, NotFoundError, DepletedError
from crud.ingredients import get_ingredient
from utils import parse_id
from utils.clock import now

logger = logging.getLogger(__name__)

def get_batch(db: Session, batch_id):
    parsed_id = parse_id(batch_id)
    if parsed_id is None:
        return None
    return db.query(InventoryBatch).filter(InventoryBatch.id == parsed_id).first()

def get_batches(db: Session):
    """
    All batches joined to their ingredient, newest first.

    Inner join: a batch whose ingredient cannot be resolved is left out. See
    crud.cascade.get_orphan_batches for those.
    """
    batches = db.query(InventoryBatch).join(
        Ingredient, InventoryBatch.ingredient_id == Ingredient.id
    ).options(
        contains_eager(InventoryBatch.ingredient)
    ).order_by(
        InventoryBatch.created_at.desc(), InventoryBatch.id.desc()
    ).all()
    logger.debug(f"Fetched {len(batches)} inventory batches")
    return batches

def _check_amount(value: float, field: str):
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{field} must be a non-negative number.")

def create_batch(db: Session, batch: InventoryBatchCreate):
    if (
        batch.ingredient_id is None
        or batch.initial_amount is None
        or batch.expiration_date is None
        or batch.total_cost is None
    ):
        raise ValidationError("ingredient_id, initial_amount, expiration_date, and total_cost are required.")
    _check_amount(batch.initial_amount, "initial_amount")
    _check_amount(batch.total_cost, "total_cost")

    ingredient = get_ingredient(db, batch.ingredient_id)
    if ingredient is None:
        raise NotFoundError("Ingredient not found.")

    stamp = now()
    db_batch = InventoryBatch(
        ingredient_id=ingredient.id,
        initial_amount=float(batch.initial_amount),
        current_amount=float(batch.initial_amount),
        expiration_date=batch.expiration_date,
        total_cost=float(batch.total_cost),
        created_at=stamp,
        modified_at=stamp,
        finished_at=None,
    )
    db.add(db_batch)
    db.commit()
    db.refresh(db_batch)
    logger.info(
        f'Inventory batch added for "{ingredient.name}" - {db_batch.initial_amount} {ingredient.unit}, '
        f'{db_batch.total_cost} ({db_batch.id})'
    )
    return db_batch

def update_batch(db: Session, batch_id, batch: InventoryBatchUpdate):
    """
    Manual override of a batch's amounts, cost or expiration.

    current_amount is not checked against initial_amount here; staff correct
    counts by hand and the override is taken as given.
    """
    db_batch = get_batch(db, batch_id)
    if db_batch is None:
        raise NotFoundError("Inventory batch not found.")

    update_data = {k: v for k, v in batch.model_dump(exclude_unset=True).items() if v is not None}
    logger.debug(f"Inventory batch update payload for {db_batch.id}: {update_data}")
    for key in ("initial_amount", "current_amount", "total_cost"):
        if key in update_data:
            update_data[key] = float(update_data[key])
            _check_amount(update_data[key], key)

    for key, value in update_data.items():
        setattr(db_batch, key, value)
    # A batch topped back up by hand is no longer finished
    if update_data.get("current_amount", 0) > 0:
        db_batch.finished_at = None
    db_batch.modified_at = now()
    db.commit()
    db.refresh(db_batch)
    logger.info(f"Inventory batch updated: {db_batch.id}")
    return db_batch

def use_batch(db: Session, batch_id, amount: float):
    """
    Take `amount` out of a batch.

    The decrement is one conditional UPDATE so concurrent uses cannot both read
    the same starting amount. The result is floored at zero, and finished_at is
    stamped in the same statement when the floor is reached. A batch already at
    zero is left untouched and DepletedError is raised.
    """
    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise ValidationError("A positive amount is required.")
    parsed_id = parse_id(batch_id)
    if parsed_id is None:
        raise NotFoundError("Inventory batch not found.")

    stamp = now()
    remaining = InventoryBatch.current_amount - amount
    updated = db.query(InventoryBatch).filter(
        InventoryBatch.id == parsed_id,
        InventoryBatch.current_amount > 0,
    ).update(
        {
            InventoryBatch.current_amount: case((remaining > 0, remaining), else_=0.0),
            InventoryBatch.finished_at: case(
                (remaining <= 0, literal(stamp, DateTime(timezone=True))), else_=null()
            ),
            InventoryBatch.modified_at: stamp,
        },
        synchronize_session=False,
    )

    if not updated:
        db.rollback()
        if get_batch(db, parsed_id) is None:
            raise NotFoundError("Inventory batch not found.")
        logger.warning(f"Use rejected, batch {parsed_id} is already depleted")
        raise DepletedError("This batch is already depleted.")

    db.commit()
    db_batch = get_batch(db, parsed_id)
    db.refresh(db_batch)
    logger.info(f"Inventory used: batch {parsed_id} - {amount} used, {db_batch.current_amount} remaining")
    return db_batch

def delete_batch(db: Session, batch_id):
    db_batch = get_batch(db, batch_id)
    if db_batch is None:
        raise NotFoundError("Inventory batch not found.")
    db.delete(db_batch)
    db.commit()
    logger.info(f"Inventory batch deleted: {batch_id}")
    return True
