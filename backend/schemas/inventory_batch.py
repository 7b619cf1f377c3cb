from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime

from schemas.ingredient import Ingredient

class InventoryBatchCreate(BaseModel):
    ingredient_id: Optional[int] = None
    initial_amount: Optional[float] = None
    expiration_date: Optional[date] = None
    total_cost: Optional[float] = None

class InventoryBatchUpdate(BaseModel):
    # ingredient_id is fixed at creation; everything else may be overridden by hand
    initial_amount: Optional[float] = None
    current_amount: Optional[float] = None
    expiration_date: Optional[date] = None
    total_cost: Optional[float] = None

class InventoryBatchUse(BaseModel):
    amount: Optional[float] = None

class InventoryBatch(BaseModel):
    id: int
    ingredient_id: int
    initial_amount: float
    current_amount: float
    expiration_date: date
    total_cost: float
    created_at: datetime
    modified_at: datetime
    finished_at: Optional[datetime] = None
    freshness: str # fresh / expiring-soon / expired, computed on read
    ingredient: Optional[Ingredient] = None

    class Config:
        from_attributes = True

class InventoryPage(BaseModel):
    items: List[InventoryBatch]
    page: int
    page_size: int
    total_items: int
    total_pages: int

class ReconcileResult(BaseModel):
    batches_removed: int
