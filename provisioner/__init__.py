"""
Provisioner.

Command-line client for a remote server-provisioning API.

- core/: Configuration, logging, exceptions
- schemas/: Pydantic models for API envelopes and server data
- cli/: Typer commands, HTTP client, table rendering, browser launching
"""

__version__ = "0.1.0"
