from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Literal
import logging

from database import get_db
from schemas.ingredient import IngredientCreate, IngredientUpdate, Ingredient, IngredientWithStock, IngredientDeleted
from crud import ingredients as crud_ingredients
from crud import inventory_batches as crud_inventory_batches
from exceptions import InventoryError
import utils.stock_status as stock
from utils.inventory_view import filter_ingredients

router = APIRouter(prefix="/api/inventory/ingredients", tags=["Ingredients"])
logger = logging.getLogger(__name__)

StockFilter = Literal["All", "in-stock", "low-stock", "out-of-stock", "unknown"]

@router.get("/", response_model=List[IngredientWithStock])
def read_ingredients(
    search: str = "",
    stock_status: StockFilter = Query("All", description="Only ingredients with this stock status"),
    db: Session = Depends(get_db),
):
    """Retrieve ingredients alphabetically, each with its stock status derived from the current batches."""
    ingredients = crud_ingredients.get_ingredients(db)
    batches = crud_inventory_batches.get_batches(db)
    result = []
    for ingredient in filter_ingredients(ingredients, batches, search=search, status=stock_status):
        d = ingredient.__dict__.copy()
        d.pop('_sa_instance_state', None)
        d['stock_status'] = stock.stock_status(ingredient, batches).value
        d['total_current_amount'] = stock.total_current_amount(ingredient, batches)
        result.append(d)
    return result

@router.post("/", response_model=Ingredient, status_code=status.HTTP_201_CREATED)
def create_ingredient(item: IngredientCreate, db: Session = Depends(get_db)):
    """Create a new ingredient. Names are unique regardless of case."""
    try:
        return crud_ingredients.create_ingredient(db=db, item=item)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to create ingredient: {e}")
        raise HTTPException(status_code=500, detail="Failed to create ingredient.")

@router.put("/{ingredient_id}", response_model=Ingredient)
def update_ingredient(ingredient_id: str, item: IngredientUpdate, db: Session = Depends(get_db)):
    try:
        return crud_ingredients.update_ingredient(db=db, ingredient_id=ingredient_id, item=item)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update ingredient.")

@router.delete("/{ingredient_id}", response_model=IngredientDeleted)
def delete_ingredient(ingredient_id: str, db: Session = Depends(get_db)):
    """Delete an ingredient together with all of its inventory batches."""
    try:
        removed = crud_ingredients.delete_ingredient(db=db, ingredient_id=ingredient_id)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to delete ingredient {ingredient_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete ingredient.")
    return {"message": "Ingredient and its inventory records deleted.", "batches_removed": removed}
