"""
Server Commands.

List, inspect, start, stop, delete, deploy, and open the management
dashboard for servers on the provisioning API.

ServerCommands holds the collaborators (API client factory, table
renderer, browser launcher) and implements each operation as a
coroutine. create_servers_app() wires those operations into a Typer
group; nothing is registered at import time.

Envelope handling:
    list and info fail with "endpoint returned error" when the API
    answers success=false. start, stop, delete, deploy and manage log a
    warning and carry on, unless features.strict_envelope is enabled.
"""

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from provisioner.cli.browser import BrowserLauncher, WebBrowserLauncher
from provisioner.cli.render import RichTableRenderer, TableRenderer, format_value
from provisioner.cli.servers_api import HTTPServerAPIClient, ServerAPIClient
from provisioner.core.config import require_app_config
from provisioner.core.exceptions import (
    ApplicationError,
    DashboardLinkError,
    EndpointError,
)
from provisioner.core.logging import get_logger, log_with_source
from provisioner.schemas.base import ApiResult
from provisioner.schemas.server import DeployRequest, ServerDetail

logger = get_logger(__name__)
err_console = Console(stderr=True)

T = TypeVar("T")

DEFAULT_GPU_MODEL = "A40"
DEFAULT_LOCATION = "na-us-las-1"
DEFAULT_INSTANCE_TYPE = "gpu"
DEFAULT_GPU_COUNT = 1
DEFAULT_VCPUS = 1
DEFAULT_STORAGE = 20
DEFAULT_STORAGE_CLASS = "st1"
DEFAULT_RAM = 2
DEFAULT_OS = "Ubuntu 18.04 LTS"

LIST_HEADERS = ("Id", "Name", "Location", "Status")
INFO_HEADERS = ("Property", "Value")


def server_detail_rows(server: ServerDetail) -> list[tuple[str, str]]:
    """Property/value rows shown by `servers info`, in display order."""
    cost = server.cost
    return [
        ("ID", server.id),
        ("Name", server.name),
        ("Location", server.location),
        ("IP", server.ip),
        ("Charged Cost", format_value(cost.charged)),
        ("Hour-On Cost", format_value(cost.hour_on)),
        ("Minutes-On Cost", format_value(cost.minutes_on)),
        ("Hour-Off Cost", format_value(cost.hour_off)),
        ("Minutes-Off Cost", format_value(cost.minutes_off)),
        ("CPU Model", server.cpu_model),
        ("GPU Count", format_value(server.gpu_count)),
        ("GPU Model", server.gpu_model),
        ("RAM", f"{format_value(server.ram)}GB"),
        ("Status", server.status),
        ("Storage", f"{format_value(server.storage)}GB"),
        ("Storage Class", server.storage_class),
        ("Type", server.type),
        ("vCPUs", format_value(server.vcpus)),
    ]


class ServerCommands:
    """
    Server operations, independent of the command-line layer.

    Args:
        client_factory: Returns a fresh ServerAPIClient per command.
            Defaults to the HTTP client built from configuration.
        renderer: Where tables go. Defaults to Rich on stdout.
        launcher: Opens dashboard URLs. Defaults to the system browser.
        strict_envelope: Treat success=false as an error for mutating
            commands too. None reads features.yaml on first use.
    """

    def __init__(
        self,
        client_factory: Callable[[], ServerAPIClient] | None = None,
        renderer: TableRenderer | None = None,
        launcher: BrowserLauncher | None = None,
        strict_envelope: bool | None = None,
    ) -> None:
        self.client_factory = client_factory or HTTPServerAPIClient.from_config
        self.renderer = renderer or RichTableRenderer()
        self.launcher = launcher or WebBrowserLauncher()
        self._strict_envelope = strict_envelope

    @property
    def strict_envelope(self) -> bool:
        if self._strict_envelope is None:
            self._strict_envelope = require_app_config().features.strict_envelope
        return self._strict_envelope

    async def _call(
        self, operation: Callable[[ServerAPIClient], Awaitable[ApiResult[T]]],
    ) -> ApiResult[T]:
        """Run one API call on a fresh client and always close it."""
        client = self.client_factory()
        try:
            return await operation(client)
        finally:
            await client.close()

    def _check_mutation(self, result: ApiResult[Any], command: str, **context: Any) -> None:
        if result.success:
            return
        if self.strict_envelope:
            raise EndpointError()
        log_with_source(
            logger,
            "cli",
            "warning",
            "Endpoint reported failure",
            command=command,
            **context,
        )

    async def list_servers(self) -> None:
        result = await self._call(lambda client: client.list_servers())
        if not result.success:
            raise EndpointError()

        self.renderer.render(
            LIST_HEADERS,
            [(s.id, s.name, s.location, s.status) for s in result.payload or []],
        )

    async def server_info(self, server_id: str) -> None:
        result = await self._call(lambda client: client.get_server(server_id))
        if not result.success:
            raise EndpointError()
        if result.payload is None:
            raise EndpointError(f"endpoint returned no details for server {server_id}")

        self.renderer.render(INFO_HEADERS, server_detail_rows(result.payload))

    async def start_server(self, server_id: str) -> None:
        result = await self._call(lambda client: client.start_server(server_id))
        self._check_mutation(result, "start", server_id=server_id)
        log_with_source(logger, "cli", "info", "success", command="start", server_id=server_id)

    async def stop_server(self, server_id: str) -> None:
        result = await self._call(lambda client: client.stop_server(server_id))
        self._check_mutation(result, "stop", server_id=server_id)
        log_with_source(logger, "cli", "info", "success", command="stop", server_id=server_id)

    async def delete_server(self, server_id: str) -> None:
        result = await self._call(lambda client: client.delete_server(server_id))
        self._check_mutation(result, "delete", server_id=server_id)
        log_with_source(logger, "cli", "info", "success", command="delete", server_id=server_id)

    async def deploy_server(self, request: DeployRequest) -> None:
        result = await self._call(lambda client: client.deploy_server(request))
        self._check_mutation(result, "deploy", name=request.name)

        if result.payload is not None:
            # Bare id on stdout so scripts can capture it
            typer.echo(result.payload.id)
        log_with_source(logger, "cli", "info", "success", command="deploy", name=request.name)

    async def manage_server(self, server_id: str) -> None:
        result = await self._call(lambda client: client.get_server(server_id))
        self._check_mutation(result, "manage", server_id=server_id)

        server = result.payload
        if server is None:
            raise DashboardLinkError(f"No details returned for server {server_id}")

        dashboard = server.links.get("dashboard")
        if dashboard is None:
            raise DashboardLinkError(f"Server {server_id} has no dashboard link")

        href = dashboard.get("href")
        if not href:
            raise DashboardLinkError(f"Dashboard link for server {server_id} has no href")

        log_with_source(logger, "cli", "debug", "Opening dashboard", server_id=server_id, url=href)
        self.launcher.open(href)


def run_command(coro: Coroutine[Any, Any, None]) -> None:
    """
    Run a command coroutine and map failures to exit code 1.

    Errors print as "Error: <message>" on stderr.
    """
    try:
        asyncio.run(coro)
    except (ApplicationError, httpx.HTTPError) as e:
        message = str(e) or type(e).__name__
        log_with_source(
            logger,
            "cli",
            "debug",
            "Command failed",
            error=message,
            error_type=type(e).__name__,
        )
        err_console.print(f"[red]Error: {escape(message)}[/red]")
        raise typer.Exit(1) from e


def create_servers_app(commands: ServerCommands) -> typer.Typer:
    """Build the `servers` command group around a ServerCommands instance."""
    app = typer.Typer(help="Manage servers", no_args_is_help=True)

    @app.command("list")
    def list_servers() -> None:
        """
        List servers.

        Examples:
            provisioner servers list
        """
        run_command(commands.list_servers())

    @app.command()
    def info(
        server_id: str = typer.Argument(..., help="Server ID"),
    ) -> None:
        """
        Get server info.

        Examples:
            provisioner servers info 1f2e3d4c
        """
        run_command(commands.server_info(server_id))

    @app.command()
    def start(
        server_id: str = typer.Argument(..., help="Server ID"),
    ) -> None:
        """Start a server."""
        run_command(commands.start_server(server_id))

    @app.command()
    def stop(
        server_id: str = typer.Argument(..., help="Server ID"),
    ) -> None:
        """Stop a server."""
        run_command(commands.stop_server(server_id))

    @app.command()
    def delete(
        server_id: str = typer.Argument(..., help="Server ID"),
    ) -> None:
        """Delete a server."""
        run_command(commands.delete_server(server_id))

    @app.command()
    def deploy(
        name: str = typer.Argument(..., help="Server name"),
        admin_user: str = typer.Argument(..., help="Administrator username"),
        admin_pass: str = typer.Argument(..., help="Administrator password"),
        gpu_model: str = typer.Option(
            DEFAULT_GPU_MODEL, "--gpuModel",
            help="The GPU model that you would like to provision",
        ),
        location: str = typer.Option(DEFAULT_LOCATION, "--location", help="Location"),
        instance_type: str = typer.Option(
            DEFAULT_INSTANCE_TYPE, "--instanceType",
            help='Either "gpu" or "cpu"',
        ),
        gpu_count: int = typer.Option(
            DEFAULT_GPU_COUNT, "--gpuCount",
            help="The number of GPUs of the model you specified earlier",
        ),
        vcpus: int = typer.Option(DEFAULT_VCPUS, "--vcpus", help="Number of vCPUs that you would like"),
        storage: int = typer.Option(DEFAULT_STORAGE, "--storage", help="Number of GB of networked storage"),
        storage_class: str = typer.Option(
            DEFAULT_STORAGE_CLASS, "--storageClass",
            help="io1 or st1, depending on storage class desired",
        ),
        ram: int = typer.Option(DEFAULT_RAM, "--ram", help="Number of GB of RAM to be deployed."),
        os: str = typer.Option(DEFAULT_OS, "--os", help="Operating system"),
    ) -> None:
        """
        Deploy a server.

        Prints the new server's id on success.

        Examples:
            provisioner servers deploy gpu-box admin secret
            provisioner servers deploy gpu-box admin secret --gpuCount 4 --ram 16
            provisioner servers deploy cpu-box admin secret --instanceType cpu
        """
        request = DeployRequest(
            name=name,
            admin_user=admin_user,
            admin_pass=admin_pass,
            instance_type=instance_type,
            gpu_model=gpu_model,
            gpu_count=gpu_count,
            vcpus=vcpus,
            ram=ram,
            storage=storage,
            storage_class=storage_class,
            os=os,
            location=location,
        )
        run_command(commands.deploy_server(request))

    @app.command()
    def manage(
        server_id: str = typer.Argument(..., help="Server ID"),
    ) -> None:
        """Open server management panel in a browser."""
        run_command(commands.manage_server(server_id))

    return app
