from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class MenuItemCreate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None # e.g., "Coffee", "Pastry"
    instructions: Optional[str] = None

class MenuItemUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    instructions: Optional[str] = None
    is_active: Optional[bool] = None
    in_stock: Optional[bool] = None

class MenuItem(BaseModel):
    id: int
    name: str
    price: float
    category: str
    instructions: str
    is_active: bool
    in_stock: bool
    created_at: datetime
    modified_at: datetime

    class Config:
        from_attributes = True
