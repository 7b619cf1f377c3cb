import logging
from sqlalchemy.orm import Session
from models.ingredient import Ingredient
from models.inventory_batch import InventoryBatch

logger = logging.getLogger(__name__)

def delete_batches_for_ingredient(db: Session, ingredient_id: int) -> int:
    """
    Bulk delete every batch referencing `ingredient_id`.

    Does not commit: the ingredient delete that triggers this owns the
    transaction, so both deletes land or neither does.
    """
    return db.query(InventoryBatch).filter(
        InventoryBatch.ingredient_id == ingredient_id
    ).delete(synchronize_session=False)

def get_orphan_batches(db: Session):
    """Batches whose ingredient no longer exists. The joined inventory list never shows these."""
    return db.query(InventoryBatch).outerjoin(
        Ingredient, InventoryBatch.ingredient_id == Ingredient.id
    ).filter(Ingredient.id.is_(None)).order_by(
        InventoryBatch.created_at.desc(), InventoryBatch.id.desc()
    ).all()

def purge_orphan_batches(db: Session) -> int:
    orphan_ids = [b.id for b in get_orphan_batches(db)]
    if not orphan_ids:
        return 0
    try:
        removed = db.query(InventoryBatch).filter(
            InventoryBatch.id.in_(orphan_ids)
        ).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.warning(f"Purged {removed} orphan inventory batches: {orphan_ids}")
    return removed
