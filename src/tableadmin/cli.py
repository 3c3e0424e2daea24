"""
TableAdmin command line interface.

Commands take a ``CONFIG`` reference of the form ``module:attribute``
pointing at an ``AdminConfig`` (or a ``TableAdmin``), for example
``myapp.admin:config``. The reference can also come from
``TABLEADMIN_CONFIG``.
"""

from __future__ import annotations

import importlib
import os
import platform
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from tableadmin._version import get_version
from tableadmin.config import AdminConfig
from tableadmin.errors import ConfigurationError
from tableadmin.logging import setup_logging
from tableadmin.runtime.auth.crypto import hash_password
from tableadmin.runtime.server import TableAdmin

app = typer.Typer(
    help="TableAdmin: generated admin panels for SQLAlchemy tables",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

ConfigArg = Annotated[
    str,
    typer.Argument(
        envvar="TABLEADMIN_CONFIG",
        help="Config reference as module:attribute (e.g. myapp.admin:config)",
    ),
]
DatabaseUrlOption = Annotated[
    str | None,
    typer.Option(
        "--database-url",
        envvar="DATABASE_URL",
        help="Override the configured database with this URL",
    ),
]


# =============================================================================
# Helpers
# =============================================================================


def import_reference(reference: str) -> Any:
    """Resolve ``module:attribute`` to the object it names.

    Raises:
        ConfigurationError: if the reference is malformed or cannot be imported.
    """
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(
            f'Invalid config reference "{reference}". Expected module:attribute.'
        )

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f'Cannot import module "{module_name}": {e}') from e

    target: Any = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ConfigurationError(
                f'Module "{module_name}" has no attribute "{attribute}"'
            ) from None
    return target


def load_admin(reference: str, database_url: str | None = None) -> TableAdmin:
    """Build a ``TableAdmin`` from a config reference."""
    target = import_reference(reference)
    if isinstance(target, TableAdmin):
        config = target.config
    elif isinstance(target, AdminConfig):
        config = target
    else:
        raise ConfigurationError(
            f'"{reference}" is a {type(target).__name__}, expected AdminConfig or TableAdmin'
        )
    if database_url:
        config = config.model_copy(update={"database": database_url})
    return TableAdmin(config)


def _fail(error: ConfigurationError) -> typer.Exit:
    err_console.print(f"[red]Configuration error:[/red] {error}")
    for message in error.errors:
        if message != str(error):
            err_console.print(f"  [red]-[/red] {message}")
    return typer.Exit(code=1)


# =============================================================================
# Commands
# =============================================================================


@app.callback()
def main_callback(
    log_level: Annotated[
        str,
        typer.Option("--log-level", envvar="TABLEADMIN_LOG_LEVEL", help="Logging level"),
    ] = "INFO",
    log_dir: Annotated[
        Path | None,
        typer.Option("--log-dir", help="Also write JSONL logs to this directory"),
    ] = None,
) -> None:
    """TableAdmin CLI main callback for global options."""
    try:
        setup_logging(log_level, log_dir=log_dir)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


@app.command()
def serve(
    config: ConfigArg,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
    database_url: DatabaseUrlOption = None,
) -> None:
    """Serve the admin panel."""
    try:
        admin = load_admin(config, database_url)
        admin.initialize()
    except ConfigurationError as e:
        raise _fail(e) from e

    if reload:
        import uvicorn

        os.environ["TABLEADMIN_CONFIG"] = config
        if database_url:
            os.environ["DATABASE_URL"] = database_url
        uvicorn.run(
            "tableadmin.cli:create_app_from_env",
            factory=True,
            host=host or admin.config.host,
            port=port or admin.config.port,
            reload=True,
        )
        return
    admin.run(host=host, port=port)


def create_app_from_env() -> Any:
    """App factory used by ``serve --reload``; reads ``TABLEADMIN_CONFIG``."""
    reference = os.environ.get("TABLEADMIN_CONFIG")
    if not reference:
        raise ConfigurationError("TABLEADMIN_CONFIG must be set to use --reload")
    return load_admin(reference, os.environ.get("DATABASE_URL")).app


@app.command()
def check(config: ConfigArg, database_url: DatabaseUrlOption = None) -> None:
    """Load and validate resources, then list them."""
    try:
        admin = load_admin(config, database_url)
        resources = admin.initialize()
    except ConfigurationError as e:
        raise _fail(e) from e

    table = Table(title=f"{admin.config.title} resources")
    table.add_column("Table", style="cyan")
    table.add_column("Route")
    table.add_column("Columns")
    table.add_column("Actions", style="dim")
    for resource in resources:
        actions = [a.name for a in resource.options.member_actions]
        actions += [a.name for a in resource.options.collection_actions]
        table.add_row(
            resource.table_name,
            resource.base_url,
            ", ".join(f"{c.name}:{c.data_type}" for c in resource.columns),
            ", ".join(actions) or "-",
        )
    console.print(table)
    console.print(f"[green]OK[/green] {len(resources)} resource(s) configured")


@app.command()
def seed(
    config: ConfigArg,
    email: Annotated[str, typer.Argument(help="Admin login email")],
    password: Annotated[
        str,
        typer.Option(
            "--password",
            prompt=True,
            hide_input=True,
            confirmation_prompt=True,
            help="Admin password (prompted when omitted)",
        ),
    ],
    database_url: DatabaseUrlOption = None,
) -> None:
    """Create an admin user unless one already exists."""
    try:
        admin = load_admin(config, database_url)
    except ConfigurationError as e:
        raise _fail(e) from e

    if admin.seed(email, password):
        console.print(f"[green]Created admin user[/green] {email}")
    else:
        console.print(f"[yellow]Admin user {email} already exists[/yellow]")


@app.command("hash-password")
def hash_password_command(
    password: Annotated[str, typer.Argument(help="Plain-text password")],
) -> None:
    """Print the stored hash for a password."""
    typer.echo(hash_password(password))


@app.command()
def version() -> None:
    """Show version and environment information."""
    typer.echo(f"TableAdmin version {get_version()}")
    typer.echo(f"  Python: {platform.python_implementation()} {platform.python_version()}")


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
