from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class IngredientCreate(BaseModel):
    # Presence is checked by the repository so a missing field is a ValidationError, not a 422
    name: Optional[str] = None
    required_amount: Optional[float] = None
    unit: Optional[str] = None # e.g., "liters", "kg"

class IngredientUpdate(BaseModel):
    name: Optional[str] = None
    required_amount: Optional[float] = None
    unit: Optional[str] = None

class Ingredient(BaseModel):
    id: int
    name: str
    required_amount: float
    unit: str
    created_at: datetime
    modified_at: datetime

    class Config:
        from_attributes = True

class IngredientWithStock(Ingredient):
    stock_status: str # in-stock / low-stock / out-of-stock / unknown
    total_current_amount: float

class IngredientDeleted(BaseModel):
    message: str
    batches_removed: int
