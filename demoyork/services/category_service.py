"""Category CRUD service."""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from demoyork.core.exceptions import Conflict, ResourceNotFoundError
from demoyork.models.category import Category


class CategoryService:

    @staticmethod
    def list_categories(db: Session):
        query = db.query(Category)
        return {"categories": query.order_by(Category.name).all(), "total": query.count()}

    @staticmethod
    def get(db: Session, category_id: int) -> Category:
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise ResourceNotFoundError(f"Category {category_id} not found")
        return category

    @staticmethod
    def create(db: Session, name: str, description: Optional[str] = None) -> Category:
        category = Category(name=name, description=description)
        db.add(category)
        CategoryService._commit(db, name)
        db.refresh(category)
        return category

    @staticmethod
    def update(
        db: Session,
        category_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Category:
        category = CategoryService.get(db, category_id)
        if name is not None:
            category.name = name
        if description is not None:
            category.description = description
        CategoryService._commit(db, category.name)
        db.refresh(category)
        return category

    @staticmethod
    def delete(db: Session, category_id: int) -> None:
        category = CategoryService.get(db, category_id)
        db.delete(category)
        db.commit()

    @staticmethod
    def _commit(db: Session, name: str) -> None:
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict(f"Category '{name}' already exists", field="name")


category_service = CategoryService()
