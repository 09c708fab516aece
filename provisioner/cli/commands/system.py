"""
System Commands.

Commands for application information and configuration.
"""

from typing import Any, Optional

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from provisioner import __version__
from provisioner.core.config import require_app_config
from provisioner.core.exceptions import ConfigurationError

app = typer.Typer(help="System information commands", no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)


def _load_config():
    try:
        return require_app_config()
    except ConfigurationError as e:
        err_console.print(f"[red]Error loading configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def info() -> None:
    """
    Display application information.

    Shows app name, version, and the provisioning API endpoint.
    """
    application = _load_config().application

    console.print(Panel(
        f"[bold]{escape(application.name)}[/bold]\n"
        f"Version: {escape(application.version)}\n"
        f"Description: {escape(application.description)}\n"
        f"Environment: {escape(application.environment)}\n"
        f"API: {escape(application.api.base_url)}",
        title="Application Info",
    ))


@app.command()
def config(
    section: Optional[str] = typer.Argument(None, help="Config section to show (application, logging, features)"),
) -> None:
    """
    Display configuration settings.

    Shows all configuration or a specific section. Secrets are never shown.
    """
    app_config = _load_config()

    sections: dict[str, BaseModel] = {
        "application": app_config.application,
        "logging": app_config.logging,
        "features": app_config.features,
    }

    if section:
        if section not in sections:
            err_console.print(f"[red]Unknown section: {escape(section)}[/red]")
            err_console.print(f"Available sections: {', '.join(sections.keys())}")
            raise typer.Exit(1)

        _display_config_section(section, sections[section].model_dump())
    else:
        for name, data in sections.items():
            _display_config_section(name, data.model_dump())
            console.print()


def _display_config_section(name: str, data: dict[str, Any]) -> None:
    """Display a configuration section as a tree."""
    tree = Tree(f"[bold cyan]{name}[/bold cyan]")

    def add_items(parent: Tree, items: dict[str, Any]) -> None:
        for key, value in items.items():
            if isinstance(value, dict):
                branch = parent.add(f"[cyan]{key}[/cyan]")
                add_items(branch, value)
            else:
                parent.add(f"[cyan]{key}[/cyan]: {escape(str(value))}")

    add_items(tree, data)
    console.print(tree)


@app.command()
def version() -> None:
    """Display the CLI version."""
    typer.echo(__version__)
