"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when configuration files or secrets are missing or invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIG_ERROR")


class ExternalServiceError(ApplicationError):
    """Raised when the provisioning API returns a response we cannot use."""

    def __init__(self, message: str = "External service error", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, code="SYS_EXTERNAL_SERVICE_ERROR")


class EndpointError(ApplicationError):
    """Raised when the response envelope reports success=false."""

    def __init__(self, message: str = "endpoint returned error") -> None:
        super().__init__(message, code="API_ENDPOINT_ERROR")


class DashboardLinkError(ApplicationError):
    """Raised when a server has no usable dashboard link."""

    def __init__(self, message: str = "Dashboard link not available") -> None:
        super().__init__(message, code="RES_DASHBOARD_LINK")


class BrowserLaunchError(ApplicationError):
    """Raised when the default browser cannot be opened."""

    def __init__(self, message: str = "Could not launch browser") -> None:
        super().__init__(message, code="SYS_BROWSER_LAUNCH")
