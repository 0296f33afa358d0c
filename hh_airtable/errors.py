"""Exception taxonomy shared by the clients, the sync pipeline and the API."""


class HHAirtableError(Exception):
    """Base class for all bridge errors."""


class Unauthenticated(HHAirtableError):
    """No usable access token in the session or on disk."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AuthExchangeFailed(HHAirtableError):
    """The provider rejected the authorization code or returned garbage."""


class UpstreamError(HHAirtableError):
    """Non-2xx response from the provider or the store."""

    def __init__(self, service: str, status: int, body: str = ""):
        self.service = service
        self.status = status
        self.body = body
        super().__init__(f"{service} API error: {status}")


class PayloadError(HHAirtableError):
    """A provider payload failed validation at ingress."""


class ContactsUnavailable(HHAirtableError):
    """The resume offers no paid contact unlock action."""
