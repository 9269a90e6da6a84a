"""Error types surfaced by the gateway and their JSON payloads."""
from __future__ import annotations


class GatewayError(Exception):
    """Base error; subclasses fix the HTTP status and the `error` label."""
    status_code = 500
    error = "Internal server error"

    def payload(self) -> dict[str, str]:
        return {"error": self.error}


class ValidationError(GatewayError):
    """Request rejected before the model is called."""
    status_code = 400

    def __init__(self, error: str, message: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.message = message

    def payload(self) -> dict[str, str]:
        body = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        return body


class GenerationError(GatewayError):
    """Any failure raised while calling the model service."""
    status_code = 500
    error = "Failed to generate content"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}
