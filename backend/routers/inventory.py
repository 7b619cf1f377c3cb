from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Literal, Optional
import logging

from database import get_db
from schemas.inventory_batch import (
    InventoryBatch, InventoryBatchCreate, InventoryBatchUpdate, InventoryBatchUse, InventoryPage, ReconcileResult
)
from crud import inventory_batches as crud_inventory_batches
from crud import cascade as crud_cascade
from exceptions import InventoryError
from utils.clock import today
from utils.inventory_view import build_inventory_page

router = APIRouter(prefix="/api/inventory", tags=["Inventory"])
logger = logging.getLogger(__name__)

FreshnessFilter = Literal["All", "fresh", "expiring-soon", "expired"]

@router.get("/", response_model=List[InventoryBatch])
def read_batches(db: Session = Depends(get_db)):
    """All batches with their ingredient, most recent first."""
    return crud_inventory_batches.get_batches(db)

@router.get("/view", response_model=InventoryPage)
def read_inventory_page(
    search: str = "",
    ingredient_id: Optional[int] = None,
    freshness: FreshnessFilter = "All",
    page: int = Query(1, description="1-based; clamped into the available range"),
    current_page: Optional[int] = Query(None, description="Page the request navigates from; out-of-range targets keep it"),
    db: Session = Depends(get_db),
):
    """One page of the filtered batch list."""
    batches = crud_inventory_batches.get_batches(db)
    result = build_inventory_page(
        batches, today(), search=search, ingredient_id=ingredient_id, freshness=freshness, page=page,
        current_page=current_page,
    )
    result["items"] = [InventoryBatch.model_validate(b) for b in result["items"]]
    return result

@router.get("/orphans", response_model=List[InventoryBatch])
def read_orphan_batches(db: Session = Depends(get_db)):
    """Batches whose ingredient no longer exists."""
    return crud_cascade.get_orphan_batches(db)

@router.post("/reconcile", response_model=ReconcileResult)
def reconcile_batches(db: Session = Depends(get_db)):
    """Remove batches left behind by an ingredient that no longer exists."""
    try:
        removed = crud_cascade.purge_orphan_batches(db)
    except Exception as e:
        logger.exception(f"Failed to purge orphan batches: {e}")
        raise HTTPException(status_code=500, detail="Failed to reconcile inventory.")
    return {"batches_removed": removed}

@router.post("/", response_model=InventoryBatch, status_code=status.HTTP_201_CREATED)
def create_batch(batch: InventoryBatchCreate, db: Session = Depends(get_db)):
    try:
        return crud_inventory_batches.create_batch(db=db, batch=batch)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to create inventory batch: {e}")
        raise HTTPException(status_code=500, detail="Failed to create inventory batch.")

@router.put("/{batch_id}", response_model=InventoryBatch)
def update_batch(batch_id: str, batch: InventoryBatchUpdate, db: Session = Depends(get_db)):
    try:
        return crud_inventory_batches.update_batch(db=db, batch_id=batch_id, batch=batch)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update inventory batch {batch_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update inventory batch.")

@router.patch("/{batch_id}/use", response_model=InventoryBatch)
def use_batch(batch_id: str, usage: InventoryBatchUse, db: Session = Depends(get_db)):
    """Record staff usage against a batch. Asking for more than is left empties the batch."""
    try:
        return crud_inventory_batches.use_batch(db=db, batch_id=batch_id, amount=usage.amount)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to record usage for batch {batch_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to record usage.")

@router.delete("/{batch_id}")
def delete_batch(batch_id: str, db: Session = Depends(get_db)):
    try:
        crud_inventory_batches.delete_batch(db=db, batch_id=batch_id)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to delete inventory batch {batch_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete inventory batch.")
    return {"message": "Inventory batch deleted."}
