class TransProxyError(Exception):
    """Base exception for transproxy.

    Every subclass maps to the HTTP status the handler answers with.
    """

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RequestValidationError(TransProxyError):
    status_code = 400


class ConfigurationError(TransProxyError):
    status_code = 500


class ProviderError(TransProxyError):
    """Non-2xx answer from the translation provider; keeps its status."""


class ProviderResponseError(TransProxyError):
    """Provider answered 2xx but the payload cannot be mapped to the input."""

    status_code = 502
