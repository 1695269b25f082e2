"""Error types raised by the query and lookup layers."""

from __future__ import annotations

from typing import Any


class PlantProxyError(RuntimeError):
    """Base class for all proxy errors.

    Attributes:
        kind: Stable machine-readable error kind.
    """

    kind = "error"


class InvalidInputError(PlantProxyError):
    """Raised when a required identifier or field is missing or invalid."""

    kind = "invalid_input"


class NotFoundError(PlantProxyError):
    """Raised when an identifier lookup matches zero records."""

    kind = "not_found"


class InvalidRecordError(PlantProxyError):
    """Raised when a record returned by the backing store is malformed."""

    kind = "invalid_record"


class UpstreamError(PlantProxyError):
    """Base class for failures reported by the fetch collaborator."""

    kind = "upstream"


class UpstreamTransportError(UpstreamError):
    """Raised on network failures and timeouts talking to the backing store."""

    kind = "upstream_transport"


class UpstreamHttpError(UpstreamError):
    """Raised when the backing store answers with a 4xx/5xx status.

    Attributes:
        status: HTTP status code.
        body: Decoded error body when available.
    """

    kind = "upstream_http"

    def __init__(self, message: str, *, status: int, body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self) -> str:
        return f"{self.args[0]} (status={self.status})"
