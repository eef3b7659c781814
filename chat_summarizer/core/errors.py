class IntegrationError(RuntimeError):
    """Failure while talking to an outbound integration."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationMissingError(IntegrationError):
    """A credential or identifier needed by an integration is not configured."""


class UpstreamError(IntegrationError):
    """The remote endpoint answered with a non-success status or could not be reached."""
