"""hcat auth login/logout - Manage the persisted bearer token."""

from __future__ import annotations

import typer
from rich.console import Console

from helm_catalog.cli.runtime import load_session

app = typer.Typer()
console = Console()


@app.command("login")
def login(
    token: str = typer.Option(..., "--token", prompt=True, hide_input=True, help="Bearer token for the backend"),
) -> None:
    """Store a bearer token for subsequent requests."""
    session = load_session()
    session.save(token.strip())
    console.print(f"[green]Token saved to {session.token_file}[/green]")


@app.command("logout")
def logout() -> None:
    """Forget the stored bearer token."""
    session = load_session()
    if not session.authenticated:
        console.print("[dim]Not logged in.[/dim]")
        return
    session.clear()
    console.print("[green]Logged out.[/green]")
