from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from schemas.menu_item import MenuItem, MenuItemCreate, MenuItemUpdate
import crud.menu_items as crud_menu_items
from exceptions import InventoryError

router = APIRouter(prefix="/api/menu", tags=["Menu"])
logger = logging.getLogger(__name__)

@router.get("/", response_model=List[MenuItem])
def get_active_items(db: Session = Depends(get_db)):
    return crud_menu_items.get_active_menu_items(db)

@router.get("/archive", response_model=List[MenuItem])
def get_archived_items(db: Session = Depends(get_db)):
    return crud_menu_items.get_archived_menu_items(db)

@router.get("/{item_id}", response_model=MenuItem)
def get_item(item_id: str, db: Session = Depends(get_db)):
    db_item = crud_menu_items.get_menu_item(db, item_id)
    if db_item is None:
        raise HTTPException(status_code=404, detail="Item not found.")
    return db_item

@router.post("/", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
def create_item(item: MenuItemCreate, db: Session = Depends(get_db)):
    try:
        return crud_menu_items.create_menu_item(db=db, item=item)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to create menu item: {e}")
        raise HTTPException(status_code=500, detail="Failed to create menu item.")

@router.put("/{item_id}", response_model=MenuItem)
def update_item(item_id: str, item: MenuItemUpdate, db: Session = Depends(get_db)):
    try:
        return crud_menu_items.update_menu_item(db=db, item_id=item_id, item=item)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update menu item.")

@router.put("/{item_id}/archive", response_model=MenuItem)
def archive_item(item_id: str, db: Session = Depends(get_db)):
    """Take an item off the menu without deleting it."""
    try:
        return crud_menu_items.archive_menu_item(db=db, item_id=item_id)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to archive menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to archive menu item.")

@router.put("/{item_id}/restore", response_model=MenuItem)
def restore_item(item_id: str, db: Session = Depends(get_db)):
    try:
        return crud_menu_items.restore_menu_item(db=db, item_id=item_id)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to restore menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to restore menu item.")

@router.delete("/{item_id}")
def delete_item(item_id: str, db: Session = Depends(get_db)):
    """Permanently delete a menu item."""
    try:
        crud_menu_items.delete_menu_item(db=db, item_id=item_id)
    except InventoryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to delete menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete menu item.")
    return {"message": "Item permanently deleted."}
