"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Configuration:
    PROVISIONER_ROOT points at this repository so config/settings/*.yaml
    resolves no matter which directory pytest is started from.
"""

import os
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
os.environ.setdefault("PROVISIONER_ROOT", str(PROJECT_ROOT))

from provisioner.core.logging import setup_logging  # noqa: E402
from provisioner.schemas.base import ApiResult  # noqa: E402
from provisioner.schemas.server import (  # noqa: E402
    DeployedServer,
    DeployRequest,
    ServerDetail,
    ServerSummary,
)


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    """Route structlog through stdlib logging to stderr for the whole session."""
    setup_logging(level="DEBUG", format_type="console", enable_file_logging=False)


# =============================================================================
# Provisioning API fakes
# =============================================================================


class FakeServerAPIClient:
    """
    In-memory ServerAPIClient.

    Records every call as (method, args). Set `error` to make every call
    raise it, or `success=False` to return failing envelopes.
    """

    def __init__(
        self,
        servers: list[ServerSummary] | None = None,
        server: ServerDetail | None = None,
        deployed: DeployedServer | None = None,
        success: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.servers = servers if servers is not None else []
        self.server = server
        self.deployed = deployed
        self.success = success
        self.error = error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if self.error is not None:
            raise self.error

    async def list_servers(self) -> ApiResult[list[ServerSummary]]:
        self._record("list_servers")
        return ApiResult(success=self.success, payload=self.servers)

    async def get_server(self, server_id: str) -> ApiResult[ServerDetail]:
        self._record("get_server", server_id)
        return ApiResult(success=self.success, payload=self.server)

    async def start_server(self, server_id: str) -> ApiResult[None]:
        self._record("start_server", server_id)
        return ApiResult(success=self.success)

    async def stop_server(self, server_id: str) -> ApiResult[None]:
        self._record("stop_server", server_id)
        return ApiResult(success=self.success)

    async def delete_server(self, server_id: str) -> ApiResult[None]:
        self._record("delete_server", server_id)
        return ApiResult(success=self.success)

    async def deploy_server(self, request: DeployRequest) -> ApiResult[DeployedServer]:
        self._record("deploy_server", request)
        return ApiResult(success=self.success, payload=self.deployed)

    async def close(self) -> None:
        self.closed = True


class RecordingRenderer:
    """TableRenderer that keeps what it was asked to render."""

    def __init__(self) -> None:
        self.tables: list[dict[str, Any]] = []

    def render(self, headers, rows, title=None) -> None:
        self.tables.append({"headers": tuple(headers), "rows": [tuple(r) for r in rows], "title": title})


class RecordingLauncher:
    """BrowserLauncher that records URLs instead of opening them."""

    def __init__(self, error: Exception | None = None) -> None:
        self.opened: list[str] = []
        self.error = error

    def open(self, url: str) -> None:
        if self.error is not None:
            raise self.error
        self.opened.append(url)


# =============================================================================
# Sample data
# =============================================================================


@pytest.fixture
def server_detail() -> ServerDetail:
    """A fully populated server as the API reports it (camelCase wire keys)."""
    return ServerDetail.model_validate({
        "id": "srv-123",
        "name": "gpu-box",
        "location": "na-us-las-1",
        "ip": "203.0.113.7",
        "cost": {
            "charged": 12.5,
            "hourOn": 0.75,
            "minutesOn": 2.0,
            "hourOff": 0.05,
            "minutesOff": 0,
        },
        "cpuModel": "AMD EPYC 7502",
        "gpuCount": 2,
        "gpuModel": "A40",
        "ram": 16,
        "status": "running",
        "storage": 100,
        "storageClass": "io1",
        "type": "gpu",
        "vcpus": 8,
        "links": {"dashboard": {"href": "https://console.example.com/servers/srv-123"}},
    })


@pytest.fixture
def server_summaries() -> list[ServerSummary]:
    return [
        ServerSummary(id="srv-b", name="beta", location="eu-de-fra-1", status="stopped"),
        ServerSummary(id="srv-a", name="alpha", location="na-us-las-1", status="running"),
        ServerSummary(id="srv-c", name="gamma", location="na-us-nyc-1", status="running"),
    ]


@pytest.fixture
def fake_client() -> FakeServerAPIClient:
    return FakeServerAPIClient()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def make_client() -> type[FakeServerAPIClient]:
    """Provide FakeServerAPIClient for tests that need a configured fake."""
    return FakeServerAPIClient


@pytest.fixture
def make_launcher() -> type[RecordingLauncher]:
    return RecordingLauncher
