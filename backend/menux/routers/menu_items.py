"""MenuItem API routes — public menu read, admin-only edits."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from menux.database import get_db
from menux.errors import ValidationError
from menux.models.menu_item import ItemCategory, MenuItem
from menux.services.guard import require_admin
from menux.services.identity_provider import AuthSession
from menux.services.store import store_call
from menux.schemas.menu_item import MenuItemCreate, MenuItemOut, MenuItemUpdate

logger = logging.getLogger(__name__)
router = APIRouter()

# NOT NULL columns an update may not clear
REQUIRED_FIELDS = {"name", "category", "price", "is_available"}


def _category(value: str) -> ItemCategory:
    try:
        return ItemCategory(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid category: {value}") from None


@router.get("/", response_model=list[MenuItemOut])
def list_menu_items(category: Optional[str] = None, db: Session = Depends(get_db)):
    """Customer-facing menu: available items only."""
    with store_call(db, "list menu items"):
        query = db.query(MenuItem).filter(MenuItem.is_available.is_(True))
        if category:
            query = query.filter(MenuItem.category == _category(category))
        return query.order_by(MenuItem.name).all()


@router.post("/", response_model=MenuItemOut, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    data = payload.model_dump()
    data["category"] = _category(payload.category)
    with store_call(db, "create menu item"):
        item = MenuItem(**data)
        db.add(item)
        db.commit()
        db.refresh(item)
    logger.info("Created menu item %s (%s) by %s", item.item_id, item.name, admin.user_id)
    return item


@router.patch("/{item_id}", response_model=MenuItemOut)
def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    updates = payload.model_dump(exclude_unset=True)
    nulled = sorted(f for f, v in updates.items() if v is None and f in REQUIRED_FIELDS)
    if nulled:
        raise ValidationError(f"Fields cannot be null: {', '.join(nulled)}")
    if "category" in updates:
        updates["category"] = _category(updates["category"])

    with store_call(db, "update menu item"):
        item = db.query(MenuItem).filter(MenuItem.item_id == item_id).first()
        if not item:
            raise HTTPException(status_code=404, detail="Menu item not found")
        for field, value in updates.items():
            setattr(item, field, value)
        db.commit()
        db.refresh(item)
    logger.info("Updated menu item %s by %s", item_id, admin.user_id)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    item_id: str,
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    with store_call(db, "delete menu item"):
        item = db.query(MenuItem).filter(MenuItem.item_id == item_id).first()
        if not item:
            raise HTTPException(status_code=404, detail="Menu item not found")
        db.delete(item)
        db.commit()
    logger.info("Deleted menu item %s by %s", item_id, admin.user_id)
