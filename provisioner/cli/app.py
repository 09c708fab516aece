"""
Root Command Tree.

create_app() assembles the full command tree at process start:

    provisioner servers list|info|start|stop|delete|deploy|manage
    provisioner system info|config|version

Options:
    --verbose, -v     INFO level logging
    --debug, -d       DEBUG level logging
"""

import typer
from rich.console import Console
from rich.markup import escape

from provisioner.cli.commands import ServerCommands, create_servers_app, system_app
from provisioner.core.logging import setup_logging

err_console = Console(stderr=True)


def create_app(commands: ServerCommands | None = None) -> typer.Typer:
    """
    Build the CLI.

    Args:
        commands: Server operations with their collaborators. Defaults to
            the HTTP API client, Rich tables and the system browser.
    """
    app = typer.Typer(
        name="provisioner",
        help="Provisioner CLI - deploy and manage servers on the provisioning API.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )

    app.add_typer(create_servers_app(commands or ServerCommands()), name="servers")
    app.add_typer(system_app, name="system")

    @app.callback()
    def main(
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Enable verbose output (INFO level logging)",
        ),
        debug: bool = typer.Option(
            False,
            "--debug",
            "-d",
            help="Enable debug mode (DEBUG level logging)",
        ),
    ) -> None:
        """
        Provisioner CLI.

        Deploy, inspect and manage servers on the provisioning API.
        Logs go to stderr; command output goes to stdout.
        """
        level = "DEBUG" if debug else "INFO" if verbose else None
        try:
            setup_logging(level=level)
        except (RuntimeError, FileNotFoundError, ValueError) as e:
            err_console.print("[red]Error: Could not configure logging.[/red]")
            err_console.print("[dim]Run from the project root or set PROVISIONER_ROOT.[/dim]")
            err_console.print(f"[dim]Error: {escape(str(e))}[/dim]")
            raise typer.Exit(1)

        if debug:
            err_console.print("[dim]Debug mode enabled[/dim]")

    return app


def run() -> None:
    """Console script entry point."""
    create_app()()
