"""Error taxonomy for the deletion gateway.

Each error maps to exactly one HTTP status. Messages are safe to show to
callers; anything sensitive belongs in logs, not in ``message``.
"""


class GatewayError(Exception):
    """Base error converted to a JSON response at the HTTP boundary."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, object]:
        """Return the JSON body for this error."""
        return {"error": self.message}


class ValidationError(GatewayError):
    """Client-fixable request problem."""

    status_code = 400


class AuthenticationError(GatewayError):
    """Missing or rejected bearer credential."""

    status_code = 401


class AuthorizationError(GatewayError):
    """Authenticated caller lacks permission."""

    status_code = 403


class NotFoundError(GatewayError):
    """No metadata record matches the object key."""

    status_code = 404


class ConfigurationError(GatewayError):
    """Operator-fixable server misconfiguration."""

    status_code = 500


class InternalError(GatewayError):
    """Unexpected fault in a collaborator or in the metadata."""

    status_code = 500


class RemoteStoreError(GatewayError):
    """Object store rejected the request or could not be reached."""

    status_code = 502

    def __init__(self, message: str, detail: str = "") -> None:
        super().__init__(message)
        self.detail = detail

    def to_body(self) -> dict[str, object]:
        """Return the JSON body including the truncated provider detail."""
        return {"error": self.message, "detail": self.detail}
