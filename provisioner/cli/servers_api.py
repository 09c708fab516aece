"""
Provisioning API Client.

ServerAPIClient is the seam between the commands and the remote API.
HTTPServerAPIClient implements it over APIClient; tests substitute fakes.

Every endpoint takes form data carrying the api_key/api_token credentials
and answers with a JSON envelope:

    {"success": true, "servers": [...]}      list
    {"success": true, "server": {...}}       get, deploy
    {"success": true}                        start, stop, delete
"""

from typing import Any, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from provisioner.cli.client import APIClient
from provisioner.core.config import get_settings
from provisioner.core.exceptions import ExternalServiceError
from provisioner.core.logging import get_logger, log_with_source
from provisioner.schemas.base import ApiResult
from provisioner.schemas.server import (
    DeployedServer,
    DeployRequest,
    ServerDetail,
    ServerSummary,
)

logger = get_logger(__name__)

_server_list = TypeAdapter(list[ServerSummary])


class ServerAPIClient(Protocol):
    """Operations the CLI needs from the provisioning API."""

    async def list_servers(self) -> ApiResult[list[ServerSummary]]: ...

    async def get_server(self, server_id: str) -> ApiResult[ServerDetail]: ...

    async def start_server(self, server_id: str) -> ApiResult[None]: ...

    async def stop_server(self, server_id: str) -> ApiResult[None]: ...

    async def delete_server(self, server_id: str) -> ApiResult[None]: ...

    async def deploy_server(self, request: DeployRequest) -> ApiResult[DeployedServer]: ...

    async def close(self) -> None: ...


class HTTPServerAPIClient:
    """ServerAPIClient backed by the provisioning API's HTTP endpoints."""

    def __init__(self, http: APIClient, api_key: str, api_token: str) -> None:
        self._http = http
        self._credentials = {"api_key": api_key, "api_token": api_token}

    @classmethod
    def from_config(cls) -> "HTTPServerAPIClient":
        """Build a client from application.yaml and the config/.env secrets."""
        settings = get_settings()
        return cls(APIClient(), settings.api_key, settings.api_token)

    async def close(self) -> None:
        await self._http.close()

    async def _call(self, path: str, **fields: Any) -> dict[str, Any]:
        """POST form data to path and return the decoded envelope body."""
        response = await self._http.post(path, data={**self._credentials, **fields})

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict) or "success" not in body:
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise ExternalServiceError(
                    f"{path} returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from e
            raise ExternalServiceError(
                f"{path} returned an unexpected response body",
                status_code=response.status_code,
            )

        if not body["success"]:
            log_with_source(
                logger,
                "api",
                "debug",
                "Envelope reported failure",
                path=path,
                status_code=response.status_code,
            )
        return body

    @staticmethod
    def _parse(path: str, parse: Any, value: Any) -> Any:
        try:
            return parse(value)
        except ValidationError as e:
            raise ExternalServiceError(f"{path} returned malformed server data: {e}") from e

    async def list_servers(self) -> ApiResult[list[ServerSummary]]:
        path = "/client/list"
        body = await self._call(path)
        raw = body.get("servers")
        if raw is None:
            return ApiResult(success=body["success"], payload=None)
        if isinstance(raw, dict):
            # Some deployments key servers by id instead of returning a list
            raw = [{"id": server_id, **server} for server_id, server in raw.items()]
        servers = self._parse(path, _server_list.validate_python, raw)
        return ApiResult(success=body["success"], payload=servers)

    async def get_server(self, server_id: str) -> ApiResult[ServerDetail]:
        path = "/client/get/single"
        body = await self._call(path, server=server_id)
        raw = body.get("server")
        server = None if raw is None else self._parse(path, ServerDetail.model_validate, raw)
        return ApiResult(success=body["success"], payload=server)

    async def start_server(self, server_id: str) -> ApiResult[None]:
        body = await self._call("/client/start/single", server=server_id)
        return ApiResult(success=body["success"])

    async def stop_server(self, server_id: str) -> ApiResult[None]:
        body = await self._call("/client/stop/single", server=server_id)
        return ApiResult(success=body["success"])

    async def delete_server(self, server_id: str) -> ApiResult[None]:
        body = await self._call("/client/delete/single", server=server_id)
        return ApiResult(success=body["success"])

    async def deploy_server(self, request: DeployRequest) -> ApiResult[DeployedServer]:
        path = "/client/deploy/single"
        fields = {key: str(value) for key, value in request.model_dump(by_alias=True).items()}
        body = await self._call(path, **fields)
        raw = body.get("server")
        server = None if raw is None else self._parse(path, DeployedServer.model_validate, raw)
        return ApiResult(success=body["success"], payload=server)
