"""Models package — import all models so create_all can discover them."""

from demoyork.models.role import Role
from demoyork.models.user import User
from demoyork.models.category import Category

__all__ = ["Role", "User", "Category"]
