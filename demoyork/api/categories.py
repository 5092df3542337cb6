"""Categories API router."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from demoyork.auth.dependencies import guard
from demoyork.auth.gate import require_admin, require_user
from demoyork.auth.pipeline import RequestContext, write_pipeline
from demoyork.db.session import get_db
from demoyork.schemas.schemas import (
    CategoryCreate, CategoryUpdate, CategoryOut, CategoryListResponse, MessageResponse,
)
from demoyork.services.category_service import category_service

router = APIRouter(prefix="/categories", tags=["categories"])

# Additive writes need level >= user; destructive writes need admin.
can_add = guard(write_pipeline(require_user))
can_change = guard(write_pipeline(require_admin))


@router.get("/", response_model=CategoryListResponse)
async def list_categories(db: Session = Depends(get_db)):
    """List all categories (public)."""
    return category_service.list_categories(db)


@router.post("/", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
async def add_category(
    body: CategoryCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(can_add),
):
    """Create a category."""
    return category_service.create(db, body.name, body.description)


@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(can_change),
):
    """Update a category (admin only)."""
    return category_service.update(db, category_id, name=body.name, description=body.description)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(can_change),
):
    """Delete a category (admin only)."""
    category_service.delete(db, category_id)
    return MessageResponse(message="Category deleted")
