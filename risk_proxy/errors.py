"""Error taxonomy for the upload proxy.

Each failure carries the HTTP status it should surface with and renders to
the JSON error contract ``{"error": ..., "details": ...}``:

  - MissingInputError      400  no file part in the request
  - UpstreamError          ---  upstream non-2xx, status passed through
  - UnexpectedFormatError  502  upstream content type not recognized
  - ProcessingError        500  anything else that went wrong
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProxyError(Exception):
    """Base class for every failure the proxy reports to its caller."""

    def __init__(
        self,
        status_code: int,
        error: str,
        details: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details
        self.extra = extra or {}

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class MissingInputError(ProxyError):
    def __init__(self) -> None:
        super().__init__(400, "No file provided")


class UpstreamError(ProxyError):
    """The scoring service answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(status_code, f"API error: {status_code}", details=body)


class UnexpectedFormatError(ProxyError):
    """The scoring service answered with neither JSON nor a spreadsheet."""

    def __init__(self, content_type: str, preview: str) -> None:
        super().__init__(
            502,
            "Unexpected response format",
            extra={"contentType": content_type, "preview": preview},
        )


class ProcessingError(ProxyError):
    def __init__(self, message: str) -> None:
        super().__init__(500, "Failed to process request", details=message)


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """Render a ProxyError as its JSON error body."""
    if exc.status_code >= 500 and not isinstance(exc, UpstreamError):
        logger.error(
            "Proxy error: status=%d error=%s path=%s",
            exc.status_code,
            exc.error,
            request.url.path,
        )
    else:
        logger.warning(
            "Proxy error: status=%d error=%s path=%s",
            exc.status_code,
            exc.error,
            request.url.path,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the proxy error handler on the application."""
    app.add_exception_handler(ProxyError, proxy_error_handler)
