"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.logging import RichHandler

from helm_catalog.config.settings import settings

app = typer.Typer(
    name="hcat",
    help="Helm Catalog - Browse and deploy charts from your chart repositories.",
    no_args_is_help=True,
)


@app.callback()
def root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", envvar="HELM_CATALOG_API_URL", help="Catalog backend base URL",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    if api_url:
        settings.api_url = api_url


def _register_commands() -> None:
    from helm_catalog.cli.commands.auth_cmd import app as auth_app
    from helm_catalog.cli.commands.clusters_cmd import app as clusters_app
    from helm_catalog.cli.commands.deploy_cmd import app as deploy_app
    from helm_catalog.cli.commands.list_cmd import app as list_app
    from helm_catalog.cli.commands.repos_cmd import app as repos_app
    from helm_catalog.cli.commands.show_cmd import app as show_app

    app.add_typer(repos_app, name="repos", help="List chart repositories")
    app.add_typer(list_app, name="list", help="List charts")
    app.add_typer(show_app, name="show", help="Show chart details")
    app.add_typer(deploy_app, name="deploy", help="Deploy a chart")
    app.add_typer(clusters_app, name="clusters", help="List deployment target clusters")
    app.add_typer(auth_app, name="auth", help="Manage the stored bearer token")


_register_commands()


def main() -> None:
    app()
