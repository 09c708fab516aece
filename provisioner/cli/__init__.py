"""
CLI Client Module.

Command-line client built with Typer for the server provisioning API.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the remote provisioning API
- CLI calls the API via HTTP (httpx)
- Tables rendered with Rich, dashboards opened with the system browser

Usage:
    provisioner --help
    provisioner servers list
    provisioner servers deploy gpu-box admin secret --gpuCount 2
"""
