"""Role seeding at startup."""

from demoyork.db.seeds.seed_roles import seed_roles
from demoyork.models.role import Role


def test_seeds_three_roles_into_empty_table(db):
    assert seed_roles(db) == 3
    roles = {r.name: r.level for r in db.query(Role).all()}
    assert roles == {"customer": 1, "user": 3, "admin": 5}


def test_second_run_inserts_nothing(db):
    seed_roles(db)
    assert seed_roles(db) == 0
    assert db.query(Role).count() == 3


def test_non_empty_table_is_left_alone(db):
    db.add(Role(name="custom", level=2, description="Pre-existing"))
    db.commit()
    assert seed_roles(db) == 0
    assert [r.name for r in db.query(Role).all()] == ["custom"]
