"""Domain-specific exceptions for the gateway.

These exceptions are safe to import from any layer; they pull in no third-party modules.
"""

from __future__ import annotations


class GatewayError(Exception):
    default_detail: str = "Gateway error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail


class ConfigurationError(GatewayError):
    default_detail = "Required configuration is missing."


class FrameDecodeError(GatewayError):
    default_detail = "Inbound frame is not a valid JSON object."

    def __init__(self, detail: str | None = None, *, payload: str | bytes | None = None) -> None:
        super().__init__(detail)
        self.payload = payload


class UpstreamError(GatewayError):
    default_detail = "Completion request failed."


class UpstreamRejectedError(UpstreamError):
    """The completion service answered with an error payload."""

    default_detail = "Completion service returned an error."


class UpstreamUnavailableError(UpstreamError):
    """Network failure, timeout, or a response body that could not be read."""

    default_detail = "Completion service unreachable or returned a malformed response."
