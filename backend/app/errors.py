from __future__ import annotations


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.message}


class ValidationError(GatewayError):
    """Malformed key, address, amount or request body."""

    status_code = 400


class InvalidKey(ValidationError):
    pass


class QueryError(ValidationError):
    pass


class SendError(ValidationError):
    pass


class GenerationError(ValidationError):
    pass


class UpstreamUnavailable(GatewayError):
    """A market-data or text-generation provider call failed.

    Never returned to the client directly: the aggregating endpoints collect
    ``str(exc)`` into their error list instead.
    """

    status_code = 502

    def __init__(self, label: str, message: str) -> None:
        super().__init__(f"{label}: {message}")
        self.label = label
        self.reason = message


ProviderError = UpstreamUnavailable


class NoDataAvailable(GatewayError):
    status_code = 503

    def __init__(self, message: str, errors: list[str]) -> None:
        super().__init__(message)
        self.errors = list(errors)

    def to_payload(self) -> dict:
        return {"error": self.message, "errors": self.errors}


class UnexpectedError(GatewayError):
    status_code = 500
