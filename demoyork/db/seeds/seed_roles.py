"""Seed default roles into the database."""

import logging

from sqlalchemy.orm import Session
from demoyork.models.role import Role

logger = logging.getLogger("demoyork.seeds")

DEFAULT_ROLES = [
    {"name": "customer", "level": 1, "description": "Business client"},
    {"name": "user", "level": 3, "description": "Normal user"},
    {"name": "admin", "level": 5, "description": "Administrator"},
]


def seed_roles(db: Session) -> int:
    """Insert the default roles when the role table is empty.

    Returns the number of roles inserted. Two instances starting at once can
    both see an empty table; lookups key on name so that race is tolerated.
    """
    if db.query(Role).count() > 0:
        logger.debug("Roles already present, skipping seed")
        return 0

    db.add_all(Role(**role_data) for role_data in DEFAULT_ROLES)
    db.commit()
    logger.info("Added %s to roles collection", ", ".join(r["name"] for r in DEFAULT_ROLES))
    return len(DEFAULT_ROLES)
