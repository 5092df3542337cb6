"""Role model for RBAC."""

from sqlalchemy import Column, Integer, String, DateTime, func
from demoyork.db.base import Base


class Role(Base):
    """System role with hierarchical level. Higher level means more privilege."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    level = Column(Integer, nullable=False, default=1)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Role {self.name}({self.level})>"
