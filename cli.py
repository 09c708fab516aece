#!/usr/bin/env python3
"""
Provisioner CLI.

Command-line client for the server provisioning API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                                  # Show help

    # Servers
    python cli.py servers list                            # List servers
    python cli.py servers info <server_id>                # Server details
    python cli.py servers start <server_id>               # Start a server
    python cli.py servers stop <server_id>                # Stop a server
    python cli.py servers delete <server_id>              # Delete a server
    python cli.py servers deploy <name> <user> <pass>     # Deploy, prints new id
    python cli.py servers manage <server_id>              # Open dashboard in browser

    # System info
    python cli.py system info                             # Show app info
    python cli.py system config                           # Show configuration
    python cli.py system version                          # Show version

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from provisioner.cli.app import create_app

app = create_app()


if __name__ == "__main__":
    app()
