"""
CLI Commands.

Organized by domain/feature area.
"""

from provisioner.cli.commands.servers import ServerCommands, create_servers_app
from provisioner.cli.commands.system import app as system_app

__all__ = [
    "ServerCommands",
    "create_servers_app",
    "system_app",
]
