"""DemoYork CLI tool (demoyorkctl)."""

import typer

app = typer.Typer(name="demoyorkctl", help="DemoYork CLI")
db_app = typer.Typer(help="Database management commands")
users_app = typer.Typer(help="User management commands")
app.add_typer(db_app, name="db")
app.add_typer(users_app, name="users")


@db_app.command("init")
def db_init():
    """Create all tables that don't exist yet."""
    from demoyork import models  # noqa: F401
    from demoyork.db.base import Base
    from demoyork.db.session import engine

    Base.metadata.create_all(bind=engine)
    typer.echo("Tables created (or already exist)")


@db_app.command("seed")
def db_seed():
    """Seed the default roles if the role table is empty."""
    from demoyork.db.session import SessionLocal
    from demoyork.db.seeds.seed_roles import seed_roles

    db = SessionLocal()
    try:
        inserted = seed_roles(db)
    finally:
        db.close()
    typer.echo(f"Seeded {inserted} roles")


@users_app.command("create")
def create_user(
    username: str = typer.Argument(..., help="Username"),
    email: str = typer.Argument(..., help="Email address"),
    role: str = typer.Option("user", help="Role name; any seeded role, including admin"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Create a user directly, bypassing the signup role allow-list."""
    from demoyork.auth.guard import Candidate, check_no_duplicate
    from demoyork.db.session import SessionLocal
    from demoyork.services.auth_service import auth_service
    from demoyork.services.credential_store import CredentialStore

    db = SessionLocal()
    try:
        store = CredentialStore(db)
        duplicate = check_no_duplicate(store, Candidate(username=username, email=email))
        if duplicate.conflict:
            typer.echo(duplicate.message, err=True)
            raise typer.Exit(code=1)
        role_row = store.get_role_by_name(role)
        if role_row is None:
            typer.echo(f"Role '{role}' not found. Run `demoyorkctl db seed` first.", err=True)
            raise typer.Exit(code=1)
        user = auth_service.create_user(store, username, email, password, role_row)
    finally:
        db.close()
    typer.echo(f"Created {user.username} ({role})")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(5010, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn
    uvicorn.run("demoyork.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
