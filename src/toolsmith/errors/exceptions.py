"""Custom exception classes for the Toolsmith API."""


class ToolsmithError(Exception):
    """Base exception for Toolsmith."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ToolsmithError):
    """Malformed or unsupported request input."""

    def __init__(self, message: str = "Bad request", details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(ToolsmithError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class AuthenticationError(ToolsmithError):
    """Authentication required or credentials invalid."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(ToolsmithError):
    """Caller lacks the group permission for the action."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class ConflictError(ToolsmithError):
    """Resource state conflict."""

    def __init__(self, message: str):
        super().__init__("CONFLICT", message, status_code=409)


class QueryError(ToolsmithError):
    """A data-source plugin query failed.

    ``description`` carries the underlying error text; ``data`` is whatever
    partial payload the plugin wants to surface (usually empty).
    """

    def __init__(self, message: str, description: str, data: dict | None = None):
        self.description = description
        self.data = data or {}
        super().__init__("QUERY_ERROR", message, details=description, status_code=400)
